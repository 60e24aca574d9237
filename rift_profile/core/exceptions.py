"""
Service layer custom exceptions.

These are the errors the feature services raise towards the HTTP layer.
Upstream transport errors live in ``core.riot_api.errors``.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for all service layer errors."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.service = service
        self.operation = operation
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        if self.service and self.operation:
            return f"[{self.service}.{self.operation}] {self.message}"
        return self.message


class ValidationError(ServiceException):
    """Missing or malformed required parameter. Caller's fault, never retried."""

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        validation_context = context or {}
        if field:
            validation_context["field"] = field
        if value is not None:
            validation_context["value"] = str(value)

        super().__init__(
            message=f"Validation error: {message}",
            service=service,
            operation=operation,
            context=validation_context,
        )


class PlayerNotFoundError(ServiceException):
    """Identity or summoner resolution returned 404."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(
            message=message,
            service="ProfileAggregator",
            operation=operation,
            context=context,
            original_error=original_error,
        )


class UpstreamUnavailableError(ServiceException):
    """Upstream data could not be fetched in time or at all.

    Raised when identity or summoner resolution fails for any reason other
    than 404, and when a profile or match-window deadline expires.
    """

    def __init__(
        self,
        message: str,
        service: Optional[str] = None,
        operation: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        upstream_context = context or {}
        if status_code:
            upstream_context["status_code"] = status_code

        super().__init__(
            message=f"Upstream unavailable: {message}",
            service=service,
            operation=operation,
            context=upstream_context,
            original_error=original_error,
        )


class AssetUnresolvedError(ServiceException):
    """No candidate source produced an asset.

    Only raised inside the asset resolver, which turns it into a placeholder.
    """

    def __init__(
        self,
        kind: str,
        resource_id: str,
        attempted: Optional[list[str]] = None,
    ):
        super().__init__(
            message=f"No source could serve {kind} asset {resource_id!r}",
            service="AssetResolver",
            operation="resolve",
            context={
                "kind": kind,
                "resource_id": resource_id,
                "attempted": attempted or [],
            },
        )
