"""Identity resolution domain service.

Settles every authentication attempt on exactly one account, whether it
arrives as a local email/password pair or as a verified external profile.
Email is the merge key across identity sources; a provider subject id,
once linked, is authoritative over email.
"""

from datetime import datetime, timezone
from uuid import uuid4

import logfire
from pydantic import ValidationError as PydanticValidationError

from gatehouse.domain.error import (
    AuthenticationError,
    DatabaseError,
    ValidationError,
)
from gatehouse.domain.model import Account, ExternalIdentity
from gatehouse.domain.repository import AccountRepository, ExternalIdentityRepository
from gatehouse.domain.value import (
    AccountId,
    Email,
    ExternalIdentityId,
    ExternalProfile,
)

from .base import Service
from .password_service import PasswordService

# One message for every local login failure so responses never reveal
# whether an email is registered.
INVALID_CREDENTIALS = "Invalid email or password"


class IdentityService(Service):
    """Domain service enforcing account uniqueness and linking rules."""

    def __init__(
        self,
        account_repository: AccountRepository,
        external_identity_repository: ExternalIdentityRepository,
        password_service: PasswordService,
        min_password_length: int = 8,
    ) -> None:
        """Initialize identity service.

        Args:
            account_repository: Account repository
            external_identity_repository: External identity repository
            password_service: Password hasher
            min_password_length: Shortest password accepted at registration
        """
        self.account_repository = account_repository
        self.external_identity_repository = external_identity_repository
        self.password_service = password_service
        self.min_password_length = min_password_length

    async def register(self, email: str, password: str) -> Account:
        """Create a local account.

        Args:
            email: Email address, stored exactly as given
            password: Plaintext password

        Returns:
            The newly created account

        Raises:
            ValidationError: If the email is malformed or taken, or the
                password is too short
            DatabaseError: If a concurrent registration won the email
        """
        with logfire.span("identity_service.register"):
            address = _parse_email(email)

            if await self.account_repository.find_by_email(address):
                logfire.info("Registration rejected - email taken")
                raise ValidationError("Email is already registered")

            if len(password) < self.min_password_length:
                raise ValidationError(
                    f"Password must be at least {self.min_password_length} characters"
                )

            now = datetime.now(timezone.utc)
            account = Account(
                id=AccountId(uuid4()),
                email=address,
                password_hash=self.password_service.hash(password),
                created_at=now,
                updated_at=now,
            )
            saved = await self.account_repository.insert(account)

            logfire.info("Local account created", account_id=str(saved.id))
            return saved

    async def authenticate(self, email: str, password: str) -> Account:
        """Check a local email/password pair.

        Args:
            email: Email address
            password: Plaintext password

        Returns:
            The matching account, unmodified

        Raises:
            AuthenticationError: With a uniform message on any failure
        """
        with logfire.span("identity_service.authenticate"):
            try:
                address = Email(email)
            except PydanticValidationError:
                raise AuthenticationError(INVALID_CREDENTIALS)

            account = await self.account_repository.find_by_email(address)
            if account is None:
                logfire.info("Login rejected", cause="unknown_email")
                raise AuthenticationError(INVALID_CREDENTIALS)

            if not account.has_password:
                logfire.info(
                    "Login rejected", cause="oauth_only", account_id=str(account.id)
                )
                raise AuthenticationError(INVALID_CREDENTIALS)

            if not self.password_service.verify(password, account.password_hash):
                logfire.info(
                    "Login rejected", cause="bad_password", account_id=str(account.id)
                )
                raise AuthenticationError(INVALID_CREDENTIALS)

            logfire.info("Local login succeeded", account_id=str(account.id))
            return account

    async def resolve_external(self, profile: ExternalProfile) -> tuple[Account, bool]:
        """Settle a verified external profile on one account.

        Lookup order is fixed: provider subject id, then email, then create.

        Args:
            profile: Normalized profile from an OAuth verifier

        Returns:
            Tuple of (account, whether a new account was created)

        Raises:
            DatabaseError: If persistence fails or a constraint is violated
        """
        with logfire.span(
            "identity_service.resolve_external",
            provider=profile.provider.value,
            provider_user_id=profile.provider_user_id,
        ):
            now = datetime.now(timezone.utc)

            # Returning identity: the linked account wins, profile is ignored
            account = await self.account_repository.find_by_provider_identity(
                profile.provider, profile.provider_user_id
            )
            if account:
                await self.external_identity_repository.touch_last_login(
                    profile.provider, profile.provider_user_id, now
                )
                logfire.info(
                    "Returning external identity",
                    account_id=str(account.id),
                    provider=profile.provider.value,
                )
                return account, False

            try:
                address = Email(profile.email)
            except PydanticValidationError:
                raise AuthenticationError(
                    f"{profile.provider.value.capitalize()} returned an unusable email"
                )

            # First login through this provider for an existing email: link
            account = await self.account_repository.find_by_email(address)
            if account:
                account = await self._link(account, profile, now)
                logfire.info(
                    "External identity linked to existing account",
                    account_id=str(account.id),
                    provider=profile.provider.value,
                )
                return account, False

            # Unseen email: create account and its first link
            candidate = Account(
                id=AccountId(uuid4()),
                email=address,
                display_name=profile.display_name,
                avatar_url=profile.avatar_url,
                created_at=now,
                updated_at=now,
            )
            account, created = await self.account_repository.insert_or_get_by_email(
                candidate
            )
            owner = await self._link(account, profile, now)
            if owner.id != account.id and created:
                # Identity was linked elsewhere meanwhile; drop the unlinked row
                await self.account_repository.delete(account.id)
                created = False
            account = owner

            logfire.info(
                "Account created from external identity"
                if created
                else "Concurrent login created account first",
                account_id=str(account.id),
                provider=profile.provider.value,
            )
            return account, created

    async def get_account(self, account_id: AccountId) -> Account:
        """Load the account a verified token refers to.

        Args:
            account_id: Token subject

        Returns:
            The account

        Raises:
            AuthenticationError: If the account no longer exists
        """
        with logfire.span("identity_service.get_account", account_id=str(account_id)):
            account = await self.account_repository.find_by_id(account_id)
            if account is None:
                logfire.warn("Token subject has no account", account_id=str(account_id))
                raise AuthenticationError("User not found")
            return account

    async def update_avatar(self, account_id: AccountId, avatar_url: str) -> Account:
        """Replace an account's avatar.

        Args:
            account_id: Account to update
            avatar_url: New avatar URL

        Returns:
            The updated account

        Raises:
            ValidationError: If the URL is blank
            AuthenticationError: If the account no longer exists
        """
        with logfire.span("identity_service.update_avatar", account_id=str(account_id)):
            avatar_url = avatar_url.strip()
            if not avatar_url:
                raise ValidationError("Avatar URL must not be empty")

            account = await self.account_repository.update_profile(
                account_id, avatar_url, datetime.now(timezone.utc)
            )
            if account is None:
                logfire.warn("Avatar update for missing account", account_id=str(account_id))
                raise AuthenticationError("User not found")

            logfire.info("Avatar updated", account_id=str(account_id))
            return account

    async def _link(
        self, account: Account, profile: ExternalProfile, now: datetime
    ) -> Account:
        """Attach the profile's identity to an account.

        When a concurrent login already linked the same identity elsewhere,
        the account owning the stored link is returned instead.
        """
        link = await self.external_identity_repository.attach(
            ExternalIdentity(
                id=ExternalIdentityId(uuid4()),
                account_id=account.id,
                provider=profile.provider,
                provider_user_id=profile.provider_user_id,
                last_login_at=now,
                created_at=now,
            )
        )
        if link.account_id == account.id:
            return account

        owner = await self.account_repository.find_by_id(link.account_id)
        if owner is None:
            raise DatabaseError("External identity points at a missing account")
        return owner


def _parse_email(email: str) -> Email:
    try:
        return Email(email)
    except PydanticValidationError:
        raise ValidationError("Email address is malformed")
