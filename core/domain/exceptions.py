"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input fails validation before any state is touched."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(DomainException):
    """Base exception for missing resources."""

    pass


class CustomerNotFoundError(NotFoundError):
    """Raised when a customer is not found."""

    def __init__(self, message: str = "Customer not found"):
        super().__init__(message, code="CUSTOMER_NOT_FOUND")


class ProfileNotFoundError(NotFoundError):
    """Raised when a staff profile is not found."""

    def __init__(self, message: str = "Staff profile not found"):
        super().__init__(message, code="PROFILE_NOT_FOUND")


class ProductNotFoundError(NotFoundError):
    """Raised when a product is not found."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message, code="PRODUCT_NOT_FOUND")


class SubscriptionNotFoundError(NotFoundError):
    """Raised when a subscription is not found."""

    def __init__(self, message: str = "Subscription not found"):
        super().__init__(message, code="SUBSCRIPTION_NOT_FOUND")


class LicenseNotFoundError(NotFoundError):
    """Raised when a license is not found."""

    def __init__(self, message: str = "License not found"):
        super().__init__(message, code="LICENSE_NOT_FOUND")


class DuplicateResourceError(DomainException):
    """Base exception for conflicts with an existing resource."""

    pass


class EmailAlreadyRegisteredError(DuplicateResourceError):
    """Raised when an e-mail address is already registered."""

    def __init__(self, message: str = "A user with this email already exists"):
        super().__init__(message, code="EMAIL_ALREADY_REGISTERED")


class AuthenticationRequiredError(DomainException):
    """Raised when an operation needs an authenticated identity."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTHENTICATION_REQUIRED")


class InvalidCredentialsError(DomainException):
    """Raised when sign-in credentials are rejected."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class PermissionDeniedError(DomainException):
    """Raised when the acting role may not perform an operation."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="PERMISSION_DENIED")


class InvalidSubscriptionStatusError(DomainException):
    """Raised when a subscription transition is invalid for the current status."""

    def __init__(self, message: str = "Invalid subscription status"):
        super().__init__(message, code="INVALID_SUBSCRIPTION_STATUS")


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class InvalidLicenseStatusError(LicenseException):
    """Raised when a license operation is invalid for the current status."""

    def __init__(self, message: str = "Invalid license status"):
        super().__init__(message, code="INVALID_LICENSE_STATUS")


class SeatLimitExceededError(LicenseException):
    """Raised when license activation limit is reached."""

    def __init__(self, message: str = "License activation limit reached"):
        super().__init__(message, code="SEAT_LIMIT_EXCEEDED")


class PaymentEventException(DomainException):
    """Base exception for inbound payment event errors."""

    pass


class InvalidPaymentEventError(PaymentEventException):
    """Raised when a payment event cannot be parsed."""

    def __init__(self, message: str = "Invalid payment event"):
        super().__init__(message, code="INVALID_PAYMENT_EVENT")


class InvalidSignatureError(PaymentEventException):
    """Raised when a webhook signature does not verify."""

    def __init__(self, message: str = "Invalid webhook signature"):
        super().__init__(message, code="INVALID_SIGNATURE")


class CollaboratorError(DomainException):
    """Base exception for faults raised by external collaborators."""

    pass


class StoreError(CollaboratorError):
    """Raised when the record store fails to serve a request."""

    def __init__(self, message: str = "Record store unavailable", code: str = "STORE_ERROR"):
        super().__init__(message, code=code)


class DuplicateRecordError(StoreError):
    """Raised when a write violates a unique constraint."""

    def __init__(self, message: str = "Duplicate record"):
        super().__init__(message, code="DUPLICATE_RECORD")


class UnknownProcedureError(StoreError):
    """Raised when a remote procedure is not registered with the store."""

    def __init__(self, message: str = "Unknown store procedure"):
        super().__init__(message, code="UNKNOWN_PROCEDURE")


class IdentityProviderError(CollaboratorError):
    """Raised when the identity provider rejects or fails a request."""

    def __init__(self, message: str = "Identity provider error", code: str = "IDENTITY_PROVIDER_ERROR"):
        super().__init__(message, code=code)


class UserAlreadyExistsError(IdentityProviderError):
    """Raised when the identity provider already holds an account for the e-mail."""

    def __init__(self, message: str = "Identity account already exists"):
        super().__init__(message, code="USER_ALREADY_EXISTS")
