"""
Authentication dependencies.

Callers authenticate with HTTP Basic credentials, `email:password`; the
password is verified against the stored Argon2 hash. Disabled users cannot
authenticate. Every route that needs an identity depends on
`get_current_principal`; routes open to anonymous callers that still want to
know who is calling use `get_current_principal_optional`.
"""

import base64
import binascii
import logging
from functools import lru_cache
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBasicCredentials
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from paperbook_backend.database import get_db
from paperbook_backend.exceptions import BasicAuthException, RoleRequiredException, UnauthorizedException
from paperbook_backend.interfaces.roles import Role
from paperbook_backend.model.auth import User
from paperbook_backend.password_utils import hash_password, needs_rehash, verify_password
from paperbook_backend.permissions.principal import Principal, principal_from_user

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("paperbook-unknown-account")


class AuthenticationService:
    """Service for handling authentication methods"""

    @staticmethod
    def authenticate_basic(email: str, password: str, db: Session) -> Principal:
        """Authenticate using basic auth credentials"""

        user = db.query(User).filter(User.email == email).first()

        if user is None or not user.is_active:
            # Unknown and disabled accounts still cost one Argon2 verify
            verify_password(password, _dummy_hash())
            raise BasicAuthException(detail="Invalid credentials")

        if not verify_password(password, user.password):
            logger.warning(f"Failed basic authentication for '{email}'")
            raise BasicAuthException(detail="Invalid credentials")

        # Upgrade hashes produced with older Argon2 parameters
        if needs_rehash(user.password):
            user.password = hash_password(password)
            db.flush()

        return principal_from_user(user)


def parse_authorization_header(request: Request) -> HTTPBasicCredentials:
    """Parse the Authorization header into Basic credentials"""

    authorization = request.headers.get("Authorization")

    if not authorization:
        raise UnauthorizedException(detail="No authorization provided", headers={"WWW-Authenticate": "Basic"})

    scheme, param = get_authorization_scheme_param(authorization)

    if not param:
        raise UnauthorizedException(detail="Invalid authorization format")

    if scheme.lower() != "basic":
        raise UnauthorizedException(detail=f"Unsupported auth scheme: {scheme}")

    try:
        data = base64.b64decode(param).decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error) as e:
        logger.warning(f"Failed to decode Basic auth: {e}")
        raise UnauthorizedException(detail="Invalid Basic auth encoding")

    email, separator, password = data.partition(":")
    if not separator:
        raise UnauthorizedException(detail="Invalid Basic auth format")
    return HTTPBasicCredentials(username=email, password=password)


def get_current_principal(
    credentials: Annotated[HTTPBasicCredentials, Depends(parse_authorization_header)],
    db: Annotated[Session, Depends(get_db)],
) -> Principal:
    """Main dependency for getting the current authenticated principal."""
    return AuthenticationService.authenticate_basic(credentials.username, credentials.password, db)


def parse_authorization_header_optional(request: Request) -> Optional[HTTPBasicCredentials]:
    """
    Parse authorization header but return None instead of raising exception.
    Used for endpoints that accept but don't require authentication.
    """
    try:
        return parse_authorization_header(request)
    except UnauthorizedException:
        return None


def get_current_principal_optional(
    credentials: Annotated[Optional[HTTPBasicCredentials], Depends(parse_authorization_header_optional)],
    db: Annotated[Session, Depends(get_db)],
) -> Optional[Principal]:
    """
    Get current principal if credentials are provided, None otherwise.

    Credentials that are present but wrong are still rejected, so a caller
    never silently downgrades to anonymous.
    """
    if credentials is None:
        return None
    return AuthenticationService.authenticate_basic(credentials.username, credentials.password, db)


def require_roles(*roles: Role):
    """Build a dependency that admits only principals holding one of `roles`."""

    allowed = [r.value for r in roles]

    def dependency(principal: Annotated[Principal, Depends(get_current_principal)]) -> Principal:
        if not principal.has_role(*roles):
            logger.warning(f"Principal {principal} rejected, requires one of {allowed}")
            raise RoleRequiredException(required_roles=allowed)
        return principal

    return dependency
