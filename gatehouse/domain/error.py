"""Domain layer errors.

Every failure a resolver operation can produce is one of these kinds.
Messages are safe to show to clients; internal causes are logged instead.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or policy-violating input. Never retried."""

    pass


class AuthenticationError(DomainError):
    """Bad credentials or an unverifiable token/assertion."""

    reason = "invalid"

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)
        self.message = message


class TokenExpiredError(AuthenticationError):
    """Session token signature is valid but its validity window has passed."""

    reason = "expired"

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Session token failed verification for any reason other than expiry."""

    reason = "invalid"

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class DatabaseError(DomainError):
    """Persistence unavailable or a uniqueness constraint was violated.

    May be transient. Every resolver entry point is safe to re-invoke with
    the same input.
    """

    retryable = True


class InternalError(DomainError):
    """Data-integrity or runtime failure that is not the client's fault."""

    pass
