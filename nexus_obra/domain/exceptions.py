"""Domain exceptions for the back office.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class NexusObraException(Exception):
    """Base exception for all application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(NexusObraException):
    """Raised when input is well-formed but violates a business rule."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(NexusObraException):
    """Raised when authentication fails (missing, invalid or expired token; bad password)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(NexusObraException):
    """Raised when the caller is authenticated but lacks role or tenant scope."""

    def __init__(
        self,
        message: str = "Access denied. Insufficient permissions.",
        *,
        required_roles: list[str] | None = None,
    ) -> None:
        """Initialize with message and optional required roles.

        Args:
            message: Human-readable message.
            required_roles: Roles that would have been accepted (role gate only).
        """
        details: dict[str, Any] = {}
        if required_roles:
            details["required_roles"] = required_roles
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(NexusObraException):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str | None = None,
        message: str | None = None,
    ) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'Client', 'Obra').
            resource_id: The ID that was not found.
            message: Optional override; defaults to '<resource_type> not found.'.
        """
        super().__init__(
            message or f"{resource_type} not found.",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class DuplicateResourceException(NexusObraException):
    """Raised when a unique constraint (username, client name/email/phone) would be violated."""

    def __init__(self, field: str, message: str = "Duplicate resource") -> None:
        """Initialize with the offending field (camelCase wire name).

        Args:
            field: Field whose value already exists (e.g. 'clientName').
            message: Human-readable message.
        """
        super().__init__(message, "DUPLICATE_RESOURCE", {"field": field})

    @property
    def field(self) -> str:
        return self.details["field"]


class MembershipConflictException(NexusObraException):
    """Raised when adding a user who already belongs to a different client."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            "User already belongs to another client.",
            "MEMBERSHIP_CONFLICT",
            {"user_id": user_id},
        )


class ClientLinkException(NexusObraException):
    """Raised when the new admin could not be linked back to the new client.

    The provisioning saga has already rolled back both the client and the admin
    user when this is raised; the original storage error is not propagated.
    """

    def __init__(self) -> None:
        super().__init__("Failed to link admin to client", "CLIENT_LINK_FAILED")


class RateLimitExceededException(NexusObraException):
    """Raised when a caller exceeds the request budget for a rate-limit scope.

    When the window is known, details also hold limit, window_seconds,
    remaining and retry_after (seconds until the window resets).
    """

    def __init__(
        self,
        scope: str,
        *,
        limit: int | None = None,
        window_seconds: int | None = None,
        remaining: int = 0,
        retry_after: int | None = None,
    ) -> None:
        details: dict[str, Any] = {"scope": scope}
        if limit is not None:
            details.update(
                limit=limit,
                window_seconds=window_seconds,
                remaining=remaining,
                retry_after=retry_after,
            )
        super().__init__("Too many requests, please try again later.", "RATE_LIMITED", details)


class UploadNotConfiguredException(NexusObraException):
    """Raised when upload signing is requested but Cloudinary settings are missing."""

    def __init__(self) -> None:
        super().__init__(
            "Cloudinary configuration is missing on the server.",
            "UPLOAD_NOT_CONFIGURED",
        )
