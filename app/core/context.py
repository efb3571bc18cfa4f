"""
Request Identity Context

Extracts the caller's identity from request headers and keeps it in
request-scoped storage for downstream stages.

Identity headers are trusted as supplied; there is no authentication here.
"""

from contextvars import ContextVar, Token
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict


USER_NAME_HEADER = "X-User-Name"
USER_ROLE_HEADER = "X-User-Role"

DEFAULT_USER_NAME = "Anonymous"
DEFAULT_USER_ROLE = "guest"


class IdentityContext(BaseModel):
    """Caller identity for one request."""
    model_config = ConfigDict(frozen=True)

    user_name: str = DEFAULT_USER_NAME
    user_role: str = DEFAULT_USER_ROLE


_identity: ContextVar[Optional[IdentityContext]] = ContextVar("identity", default=None)


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    # Starlette Headers are case-insensitive; plain dicts are not
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                value = candidate
                break
    if value is None or not value.strip():
        return None
    return value.strip()


def extract_identity(headers: Mapping[str, str]) -> IdentityContext:
    """
    Build the IdentityContext from request headers.

    Missing or blank headers fall back to "Anonymous" / "guest".
    Never raises.
    """
    return IdentityContext(
        user_name=_header(headers, USER_NAME_HEADER) or DEFAULT_USER_NAME,
        user_role=_header(headers, USER_ROLE_HEADER) or DEFAULT_USER_ROLE,
    )


def set_identity(identity: IdentityContext) -> Token:
    """Attach identity to the current request's context."""
    return _identity.set(identity)


def reset_identity(token: Token) -> None:
    _identity.reset(token)


def get_identity() -> IdentityContext:
    """Identity of the current request, or the anonymous default."""
    return _identity.get() or IdentityContext()
