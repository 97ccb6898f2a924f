"""Unit tests for IdentityService."""

from datetime import datetime, timezone
from uuid import uuid4

from dishka import AsyncContainer
import pytest

from gatehouse.domain.error import AuthenticationError, ValidationError
from gatehouse.domain.model import Account, ExternalIdentity
from gatehouse.domain.repository import AccountRepository, ExternalIdentityRepository
from gatehouse.domain.service import (
    INVALID_CREDENTIALS,
    IdentityService,
    PasswordService,
)
from gatehouse.domain.value import AuthProvider, Email, ExternalProfile
from gatehouse.persistence.repository.inmemory import (
    InMemoryAccountRepository,
    InMemoryExternalIdentityRepository,
)
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class LateLinkAccountRepository(InMemoryAccountRepository):
    """Misses the first provider lookup, as if the link landed right after it."""

    def __init__(self, identity_repository):
        super().__init__(identity_repository)
        self._missed = False

    async def find_by_provider_identity(self, provider, provider_user_id):
        if not self._missed:
            self._missed = True
            return None
        return await super().find_by_provider_identity(provider, provider_user_id)


def google_profile(
    sub: str = "google-sub-1",
    email: str = "alice@example.com",
    name: str | None = "Alice",
    picture: str | None = "https://lh3.example.com/alice.png",
) -> ExternalProfile:
    return ExternalProfile(
        provider=AuthProvider.GOOGLE,
        provider_user_id=sub,
        email=email,
        display_name=name,
        avatar_url=picture,
    )


def facebook_profile(
    user_id: str = "fb-1", email: str = "alice@example.com"
) -> ExternalProfile:
    return ExternalProfile(
        provider=AuthProvider.FACEBOOK,
        provider_user_id=user_id,
        email=email,
        display_name="Alice FB",
        avatar_url=None,
    )


class TestRegister:
    """Tests for local registration."""

    @pytest.mark.asyncio
    async def test_register_then_authenticate(self, unit_env: AsyncContainer):
        """A registered pair signs in to the same account."""
        identity_service = await unit_env.get(IdentityService)

        created = await identity_service.register("alice@example.com", "password123")
        signed_in = await identity_service.authenticate(
            "alice@example.com", "password123"
        )

        assert signed_in.id == created.id

    @pytest.mark.asyncio
    async def test_password_is_hashed(self, unit_env: AsyncContainer):
        """The plaintext password is never stored."""
        identity_service = await unit_env.get(IdentityService)

        account = await identity_service.register("alice@example.com", "password123")

        assert account.has_password
        assert account.password_hash != "password123"
        assert "password123" not in account.password_hash

    @pytest.mark.asyncio
    async def test_email_already_registered(self, unit_env: AsyncContainer):
        """A second registration with the same email is rejected."""
        identity_service = await unit_env.get(IdentityService)
        await identity_service.register("alice@example.com", "password123")

        with pytest.raises(ValidationError, match="Email is already registered"):
            await identity_service.register("alice@example.com", "different456")

    @pytest.mark.asyncio
    async def test_short_password_creates_nothing(self, unit_env: AsyncContainer):
        """A too-short password is rejected before any account is stored."""
        identity_service = await unit_env.get(IdentityService)
        account_repository = await unit_env.get(AccountRepository)

        with pytest.raises(ValidationError, match="at least 8 characters"):
            await identity_service.register("alice@example.com", "short")

        assert await account_repository.count() == 0

    @pytest.mark.asyncio
    async def test_malformed_email(self, unit_env: AsyncContainer):
        """Emails without a local part and domain are rejected."""
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(ValidationError, match="malformed"):
            await identity_service.register("not-an-email", "password123")

    @pytest.mark.asyncio
    async def test_email_is_case_sensitive(self, unit_env: AsyncContainer):
        """Emails are stored and compared exactly as given."""
        identity_service = await unit_env.get(IdentityService)

        first = await identity_service.register("Alice@example.com", "password123")
        second = await identity_service.register("alice@example.com", "password123")

        assert first.id != second.id
        assert first.email == Email("Alice@example.com")


class TestAuthenticate:
    """Tests for local login."""

    @pytest.mark.asyncio
    async def test_unknown_email(self, unit_env: AsyncContainer):
        """Unknown emails get the uniform message."""
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.authenticate("nobody@example.com", "password123")
        assert exc_info.value.message == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env: AsyncContainer):
        """Wrong passwords get the uniform message."""
        identity_service = await unit_env.get(IdentityService)
        await identity_service.register("alice@example.com", "password123")

        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.authenticate("alice@example.com", "password124")
        assert exc_info.value.message == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_oauth_only_account(self, unit_env: AsyncContainer):
        """Accounts without a password get the uniform message."""
        identity_service = await unit_env.get(IdentityService)
        await identity_service.resolve_external(google_profile())

        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.authenticate("alice@example.com", "anything123")
        assert exc_info.value.message == INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_malformed_email(self, unit_env: AsyncContainer):
        """Malformed emails at login are just bad credentials."""
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(AuthenticationError) as exc_info:
            await identity_service.authenticate("nope", "password123")
        assert exc_info.value.message == INVALID_CREDENTIALS


class TestResolveExternal:
    """Tests for external identity resolution."""

    @pytest.mark.asyncio
    async def test_first_login_creates_account_and_link(self, unit_env: AsyncContainer):
        """An unseen identity and email creates one account with one link."""
        identity_service = await unit_env.get(IdentityService)
        identity_repository = await unit_env.get(ExternalIdentityRepository)

        account, created = await identity_service.resolve_external(google_profile())

        assert created is True
        assert account.email == Email("alice@example.com")
        assert account.display_name == "Alice"
        assert account.avatar_url == "https://lh3.example.com/alice.png"
        assert not account.has_password
        links = await identity_repository.find_all_by_account_id(account.id)
        assert [(link.provider, link.provider_user_id) for link in links] == [
            (AuthProvider.GOOGLE, "google-sub-1")
        ]

    @pytest.mark.asyncio
    async def test_repeated_login_is_idempotent(self, unit_env: AsyncContainer):
        """Logging in again resolves to the same account without new rows."""
        identity_service = await unit_env.get(IdentityService)
        account_repository = await unit_env.get(AccountRepository)
        identity_repository = await unit_env.get(ExternalIdentityRepository)

        first, _ = await identity_service.resolve_external(google_profile())
        first_link = await identity_repository.find_by_provider(
            AuthProvider.GOOGLE, "google-sub-1"
        )
        second, created = await identity_service.resolve_external(google_profile())

        assert created is False
        assert second.id == first.id
        assert await account_repository.count() == 1
        assert len(await identity_repository.find_all_by_account_id(first.id)) == 1
        second_link = await identity_repository.find_by_provider(
            AuthProvider.GOOGLE, "google-sub-1"
        )
        assert second_link.id == first_link.id
        assert second_link.last_login_at >= first_link.last_login_at

    @pytest.mark.asyncio
    async def test_links_to_existing_local_account(self, unit_env: AsyncContainer):
        """An external login with a registered email attaches to that account."""
        identity_service = await unit_env.get(IdentityService)
        account_repository = await unit_env.get(AccountRepository)

        local = await identity_service.register("alice@example.com", "password123")
        linked, created = await identity_service.resolve_external(google_profile())

        assert created is False
        assert linked.id == local.id
        assert await account_repository.count() == 1
        # Local credentials still work after linking
        again = await identity_service.authenticate("alice@example.com", "password123")
        assert again.id == local.id

    @pytest.mark.asyncio
    async def test_linking_keeps_local_profile(self, unit_env: AsyncContainer):
        """Linking does not copy the provider's name or picture."""
        identity_service = await unit_env.get(IdentityService)
        await identity_service.register("alice@example.com", "password123")

        linked, _ = await identity_service.resolve_external(google_profile())

        assert linked.display_name is None
        assert linked.avatar_url is None

    @pytest.mark.asyncio
    async def test_provider_id_wins_over_changed_email(self, unit_env: AsyncContainer):
        """A linked identity resolves to its account even if the email changed."""
        identity_service = await unit_env.get(IdentityService)
        account_repository = await unit_env.get(AccountRepository)

        original, _ = await identity_service.resolve_external(google_profile())
        moved, created = await identity_service.resolve_external(
            google_profile(email="alice.new@example.com")
        )

        assert created is False
        assert moved.id == original.id
        assert moved.email == Email("alice@example.com")
        assert await account_repository.count() == 1

    @pytest.mark.asyncio
    async def test_two_providers_same_email(self, unit_env: AsyncContainer):
        """Google and Facebook logins with one email share one account."""
        identity_service = await unit_env.get(IdentityService)
        identity_repository = await unit_env.get(ExternalIdentityRepository)

        via_google, google_created = await identity_service.resolve_external(
            google_profile()
        )
        via_facebook, facebook_created = await identity_service.resolve_external(
            facebook_profile()
        )

        assert google_created is True
        assert facebook_created is False
        assert via_facebook.id == via_google.id
        links = await identity_repository.find_all_by_account_id(via_google.id)
        assert {link.provider for link in links} == {
            AuthProvider.GOOGLE,
            AuthProvider.FACEBOOK,
        }

    @pytest.mark.asyncio
    async def test_same_subject_different_providers(self, unit_env: AsyncContainer):
        """Subject ids are scoped by provider."""
        identity_service = await unit_env.get(IdentityService)
        account_repository = await unit_env.get(AccountRepository)

        a, _ = await identity_service.resolve_external(
            google_profile(sub="42", email="a@example.com")
        )
        b, created = await identity_service.resolve_external(
            facebook_profile(user_id="42", email="b@example.com")
        )

        assert created is True
        assert a.id != b.id
        assert await account_repository.count() == 2

    @pytest.mark.asyncio
    async def test_unusable_provider_email(self, unit_env: AsyncContainer):
        """A provider email that is not an address cannot create an account."""
        identity_service = await unit_env.get(IdentityService)
        account_repository = await unit_env.get(AccountRepository)

        with pytest.raises(AuthenticationError):
            await identity_service.resolve_external(google_profile(email="nope"))

        assert await account_repository.count() == 0

    @pytest.mark.asyncio
    async def test_identity_linked_concurrently_leaves_no_orphan(self):
        """When another login links the identity first, the new row is dropped."""
        identity_repository = InMemoryExternalIdentityRepository()
        account_repository = LateLinkAccountRepository(identity_repository)
        identity_service = IdentityService(
            account_repository, identity_repository, PasswordService()
        )
        now = datetime.now(timezone.utc)
        owner = await account_repository.insert(
            Account(id=uuid4(), email=Email("old@example.com"))
        )
        await identity_repository.attach(
            ExternalIdentity(
                id=uuid4(),
                account_id=owner.id,
                provider=AuthProvider.GOOGLE,
                provider_user_id="google-sub-1",
                last_login_at=now,
                created_at=now,
            )
        )

        account, created = await identity_service.resolve_external(
            google_profile(email="new@example.com")
        )

        assert created is False
        assert account.id == owner.id
        assert await account_repository.count() == 1
        assert await account_repository.find_by_email(Email("new@example.com")) is None


class TestProfile:
    """Tests for account lookup and avatar updates."""

    @pytest.mark.asyncio
    async def test_get_account(self, unit_env: AsyncContainer):
        """Existing accounts load by id."""
        identity_service = await unit_env.get(IdentityService)
        account = await identity_service.register("alice@example.com", "password123")

        loaded = await identity_service.get_account(account.id)

        assert loaded == account

    @pytest.mark.asyncio
    async def test_get_missing_account(self, unit_env: AsyncContainer):
        """A token subject without an account is an authentication failure."""
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(AuthenticationError, match="User not found"):
            await identity_service.get_account(uuid4())

    @pytest.mark.asyncio
    async def test_update_avatar(self, unit_env: AsyncContainer):
        """The avatar is replaced and the change persists."""
        identity_service = await unit_env.get(IdentityService)
        account = await identity_service.register("alice@example.com", "password123")

        updated = await identity_service.update_avatar(
            account.id, "https://cdn.example.com/new.png"
        )

        assert updated.avatar_url == "https://cdn.example.com/new.png"
        assert updated.updated_at >= account.updated_at
        reloaded = await identity_service.get_account(account.id)
        assert reloaded.avatar_url == "https://cdn.example.com/new.png"

    @pytest.mark.asyncio
    async def test_update_avatar_blank(self, unit_env: AsyncContainer):
        """Blank URLs are rejected."""
        identity_service = await unit_env.get(IdentityService)
        account = await identity_service.register("alice@example.com", "password123")

        with pytest.raises(ValidationError):
            await identity_service.update_avatar(account.id, "   ")

    @pytest.mark.asyncio
    async def test_update_avatar_missing_account(self, unit_env: AsyncContainer):
        """Updating a vanished account is an authentication failure."""
        identity_service = await unit_env.get(IdentityService)

        with pytest.raises(AuthenticationError):
            await identity_service.update_avatar(uuid4(), "https://cdn.example.com/x.png")
