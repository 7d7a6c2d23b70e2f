"""
PIN hashing and session tokens
"""
import secrets
from datetime import datetime, timedelta, timezone

import bcrypt

from acaia.config import settings


def hash_pin(pin: str) -> str:
    """Hash a staff PIN with bcrypt"""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pin.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_pin(plain_pin: str, pin_hash: str) -> bool:
    try:
        return bcrypt.checkpw(plain_pin.encode("utf-8"), pin_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        return False


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def session_expiry(now: datetime = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    return now + timedelta(hours=settings.session_ttl_hours)


def as_utc(dt: datetime) -> datetime:
    """SQLite hands back naive datetimes; they are stored as UTC"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
