"""Password hashing utilities."""

import bcrypt

from fundteam.util.error import PasswordHashError


def hash_password(password: str) -> str:
    """Hash a password with a per-password bcrypt salt.

    Args:
        password: Plain text password

    Returns:
        bcrypt hash as text

    Raises:
        PasswordHashError: If the password cannot be hashed
    """
    try:
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()
    except ValueError as e:
        raise PasswordHashError(f"Failed to hash password: {e}") from e

