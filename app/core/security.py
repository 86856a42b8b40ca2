"""
Password hashing utilities.

Credentials are stored as PBKDF2-SHA256 hashes; storage never sees the
plain password.
"""

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)
