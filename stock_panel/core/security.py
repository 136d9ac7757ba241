"""
Stock Panel - Security Module
Password Hashing and Opaque Token Generation
"""
import base64
import secrets

import bcrypt


TOKEN_BYTES = 32


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        The hashed password string
    """
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')


def generate_token(nbytes: int = TOKEN_BYTES) -> str:
    """
    Create an opaque bearer or reset token.

    Args:
        nbytes: Number of random bytes before encoding

    Returns:
        URL-safe base64 encoding of cryptographically random bytes
    """
    return base64.urlsafe_b64encode(secrets.token_bytes(nbytes)).decode("ascii")
