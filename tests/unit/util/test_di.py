"""Unit tests for provider selection."""

import pytest

from gatehouse.util.di import (
    GoogleProvider,
    PersistenceProvider,
    ProdConfigProvider,
    ProdGoogleProvider,
    ProdPersistenceProvider,
    get_provider,
)
from gatehouse.util.error import DependencyInjectionError
from tests.di import MockGoogleProvider, MockPersistenceProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_returned_as_is(self):
        """Providers without implementations are used directly."""
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_selects_production_implementation(self):
        """Mockable components resolve to their production provider by default."""
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(GoogleProvider) is ProdGoogleProvider

    def test_selects_mock_implementation(self):
        """use_mock picks the mock provider."""
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider
        assert get_provider(GoogleProvider, use_mock=True) is MockGoogleProvider


class TestBuildTestContainer:
    """Tests for build_test_container."""

    def test_unknown_component_rejected(self):
        """Only declared components can be unmocked."""
        with pytest.raises(DependencyInjectionError):
            build_test_container(unmock={"github"})  # type: ignore[arg-type]
