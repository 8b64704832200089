class DomainError(Exception):
    """Base class for all domain-level errors."""

    pass


class ValidationError(DomainError):
    """A required field is missing or malformed."""

    pass


class VerificationError(DomainError):
    """A passcode could not be verified. `reason` is machine readable."""

    reason: str = "invalid"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)


class CodeNotFound(VerificationError):
    """No pending passcode for this email."""

    reason = "not_found"


class CodeExpired(VerificationError):
    """The pending passcode outlived its TTL and has been discarded."""

    reason = "expired"


class CodeMismatch(VerificationError):
    """The submitted code differs from the pending one."""

    reason = "mismatch"


class PurposeMismatch(VerificationError):
    """The pending passcode was issued for another flow."""

    reason = "purpose_mismatch"


class ConfigurationError(DomainError):
    """A required secret or setting is not configured."""

    pass


class UpstreamFailure(DomainError):
    """A collaborator (storefront platform, mail relay) failed."""

    def __init__(
        self, message: str, *, status_code: int | None = None, detail=None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class DeliveryFailed(UpstreamFailure):
    """The passcode email could not be handed to the mail relay."""

    pass


class CustomerNotFound(DomainError):
    """No storefront customer matches the lookup criteria (e.g., email)."""

    pass


class CustomerAlreadyExists(DomainError):
    """A storefront customer with the given email already exists."""

    pass


class InvalidSsoToken(DomainError):
    """An SSO token is malformed or its signature does not match."""

    pass


class OrderNotFound(DomainError):
    """The order does not exist or belongs to another customer."""

    pass
