"""Security helpers for trigger authentication and token handling."""

from datetime import datetime, timedelta, timezone
import hmac

from jose import JWTError, jwt

from crm_notifications.config import get_settings

ALGORITHM = "HS256"


def verify_trigger_credential(authorization: str | None) -> bool:
    """Return ``True`` when ``authorization`` is ``Bearer <CRON_SECRET>``.

    An unset secret rejects every trigger.
    """

    secret = get_settings().cron_secret
    if not secret or not authorization:
        return False
    expected = f"Bearer {secret}"
    return hmac.compare_digest(authorization.encode(), expected.encode())


# ---- JWT ----


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
