"""FastAPI dependency utilities."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from crm_notifications.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLES = frozenset({"Admin", "SuperAdmin"})


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity extracted from a verified access token."""

    id: int
    role: str | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the user may act on other users' inboxes."""

        return self.role in ADMIN_ROLES


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str) -> AuthenticatedUser:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _unauthorized() from exc

    role = payload.get("role")
    return AuthenticatedUser(id=user_id, role=role if isinstance(role, str) else None)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """Return the authenticated user from the bearer token."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized()
    return resolve_current_user(credentials.credentials)
