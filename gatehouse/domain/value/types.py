"""Domain value objects for Gatehouse.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from enum import Enum

from pydantic import field_validator

from gatehouse.domain.value.common import RootValueObject, ValueObject
from gatehouse.domain.value.identifiers import AccountId

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+$")


class AuthProvider(str, Enum):
    """Supported external identity providers."""

    GOOGLE = "google"
    FACEBOOK = "facebook"


class Email(RootValueObject[str]):
    """Account email address.

    Stored exactly as given: comparison is case-sensitive.
    """

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate email has a local part and a domain."""
        if len(v) > 320 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Email must look like local@domain")
        return v


class ExternalProfile(ValueObject):
    """Provider-agnostic identity produced by an OAuth verifier.

    Consumed once by the identity service, then discarded.
    """

    provider: AuthProvider
    provider_user_id: str  # Stable subject id assigned by the provider
    email: str
    display_name: str | None = None
    avatar_url: str | None = None


class PublicAccount(ValueObject):
    """Redacted account view safe to return to clients."""

    id: str
    email: str
    display_name: str | None = None
    avatar_url: str


class AuthSession(ValueObject):
    """Signed session token plus the public view of its account."""

    token: str
    user: PublicAccount


class TokenClaims(ValueObject):
    """Claims carried by a verified session token."""

    subject: AccountId
    issued_at: int  # Seconds since epoch
    expires_at: int  # Seconds since epoch
