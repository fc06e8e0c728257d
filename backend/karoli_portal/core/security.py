"""
Identity provider seam.

Tokens are issued and refreshed by the external identity provider. The portal
only verifies them, reads the user's role from the claims, and forwards the
raw token to the university backend.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, Request
from jose import JWTError, jwt

from karoli_portal.core.config import settings
from karoli_portal.core.exceptions import AuthenticationError, AuthorizationError, InvalidTokenError
from karoli_portal.core.logging_config import logger, set_user_id


class Role(str, Enum):
    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


# Where the provider may keep the role, in lookup order
ROLE_CLAIM_PATHS = (
    ("role",),
    ("public_metadata", "role"),
    ("metadata", "role"),
    ("unsafe_metadata", "role"),
)


@dataclass
class CurrentUser:
    id: str
    token: str
    email: str = ""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None

    @property
    def display_name(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email or "User"


def extract_token(request: Request) -> str:
    """Bearer header first, then the provider's session cookie"""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, credentials = auth_header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    cookie = request.cookies.get(settings.identity_session_cookie)
    if cookie:
        return cookie

    raise AuthenticationError()


def decode_token(token: str) -> Dict[str, Any]:
    """Verify a provider-issued token and return its claims"""
    if not settings.identity_jwt_key:
        raise InvalidTokenError("Identity provider key is not configured")
    try:
        return jwt.decode(
            token,
            settings.identity_jwt_key,
            algorithms=settings.identity_jwt_algorithms,
            audience=settings.identity_jwt_audience,
            issuer=settings.identity_jwt_issuer,
            options={"verify_aud": bool(settings.identity_jwt_audience)},
        )
    except JWTError as e:
        raise InvalidTokenError(f"Could not validate credentials: {e}")


def role_from_claims(claims: Dict[str, Any]) -> Optional[str]:
    for path in ROLE_CLAIM_PATHS:
        value: Any = claims
        for key in path:
            value = value.get(key) if isinstance(value, dict) else None
        if isinstance(value, str) and value:
            return value
    return None


def user_from_claims(claims: Dict[str, Any], token: str) -> CurrentUser:
    subject = claims.get("sub")
    if not subject:
        raise InvalidTokenError("Token has no subject")
    return CurrentUser(
        id=str(subject),
        token=token,
        email=claims.get("email") or "",
        first_name=claims.get("first_name") or claims.get("given_name"),
        last_name=claims.get("last_name") or claims.get("family_name"),
        role=role_from_claims(claims),
    )


async def get_current_user(request: Request) -> CurrentUser:
    try:
        token = extract_token(request)
        user = user_from_claims(decode_token(token), token)
    except AuthenticationError as e:
        logger.log_auth_event("token", success=False, reason=e.message, path=request.url.path)
        raise
    set_user_id(user.id)
    return user


def require_role(role: Role, allow_missing: bool = False) -> Callable:
    """
    Dependency factory gating a dashboard area on the user's role.

    With allow_missing, users whose token carries no role are let through.
    The student area works this way; faculty and admin need an exact match.
    """

    async def dependency(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role == role.value:
            return user
        if user.role is None and allow_missing:
            return user
        logger.log_auth_event(
            "role_gate", success=False,
            reason=f"required {role.value}, got {user.role}",
        )
        raise AuthorizationError(role.value, user.role)

    return dependency


require_student = require_role(Role.STUDENT, allow_missing=True)
require_faculty = require_role(Role.FACULTY)
require_admin = require_role(Role.ADMIN)
