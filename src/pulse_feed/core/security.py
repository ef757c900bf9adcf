"""Password hashing and bearer token helpers."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.hash import pbkdf2_sha256

from pulse_feed.core.errors import InvalidToken
from pulse_feed.core.settings import settings

# Verified against when the username is unknown so both login branches do the same work.
_DUMMY_HASH = pbkdf2_sha256.hash("pulse-feed-dummy-password")


def hash_password(password: str) -> str:
    """Return a salted one-way hash of ``password``."""
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Check ``password`` against a stored hash.

    When ``password_hash`` is None a dummy hash is checked instead and the
    result is always False.
    """
    if password_hash is None:
        pbkdf2_sha256.verify(password, _DUMMY_HASH)
        return False
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        return False


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed JWT bound to ``user_id`` that expires after the configured lifetime."""
    issued_at = datetime.now(UTC)
    to_encode: dict[str, object] = {"sub": str(user_id), "iat": issued_at}
    if extra_claims:
        to_encode.update(extra_claims)
    to_encode["exp"] = issued_at + timedelta(minutes=settings.access_token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> int:
    """Verify ``token`` and return the user ID it carries.

    Raises:
        InvalidToken: If the signature is wrong, the token is malformed or
            expired, or the subject is not a user ID.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidToken() from err

    subject = payload.get("sub")
    if subject is None:
        raise InvalidToken()
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise InvalidToken() from err
