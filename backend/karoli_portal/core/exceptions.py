"""
Custom Exceptions for Karoli Portal
===================================

Pages catch `UpstreamError` and show its message in an inline banner.
`AuthenticationError` and `AuthorizationError` are turned into redirects
by the handlers registered in `karoli_portal.main`.

Usage:
    from karoli_portal.core.exceptions import ApiRequestError

    if response.status_code >= 400:
        raise ApiRequestError("Failed to fetch grades", response.status_code)
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """Base exception for all portal errors"""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Identity Errors
# ============================================

class AuthenticationError(PortalError):
    """No usable credential was presented"""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTH_REQUIRED")


class InvalidTokenError(AuthenticationError):
    """Token could not be verified"""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class AuthorizationError(PortalError):
    """User's role does not grant access to this area"""

    def __init__(self, required_role: str, actual_role: Optional[str] = None):
        super().__init__(
            f"Role '{required_role}' required",
            code="NOT_AUTHORIZED",
            details={"required_role": required_role, "actual_role": actual_role}
        )


# ============================================
# University Backend Errors
# ============================================

class UpstreamError(PortalError):
    """Base class for failures talking to the university backend"""

    def __init__(self, message: str, code: str = "UPSTREAM_ERROR",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details)


class ApiRequestError(UpstreamError):
    """Backend answered with a non-2xx status"""

    def __init__(self, message: str, status_code: int):
        super().__init__(
            message,
            code="UPSTREAM_HTTP_ERROR",
            details={"status_code": status_code}
        )
        self.status_code = status_code


class ApiResponseError(UpstreamError):
    """Backend could not be reached or returned something other than JSON"""

    def __init__(self, message: str, reason: Optional[str] = None):
        super().__init__(
            message,
            code="UPSTREAM_BAD_RESPONSE",
            details={"reason": reason} if reason else {}
        )


class ApiEnvelopeError(UpstreamError):
    """Backend returned an envelope with success set to false"""

    def __init__(self, message: str):
        super().__init__(message, code="UPSTREAM_UNSUCCESSFUL")
