"""
Administrator Credential Hashing

The administrator password is never stored in plaintext. The config file
holds a PBKDF2-SHA256 hash in the form:

    pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>
"""

import hashlib
import hmac
import secrets


ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 600_000
SALT_BYTES = 16


class InvalidHashError(ValueError):
    """The configured credential hash is malformed."""
    pass


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Hash a password for storage in the config file."""
    salt = secrets.token_bytes(SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Check a password against a stored hash in constant time.

    Raises:
        InvalidHashError: If `encoded` is not a hash produced by hash_password
    """
    try:
        algorithm, iterations, salt_hex, digest_hex = encoded.strip().split("$")
        iterations = int(iterations)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except ValueError:
        raise InvalidHashError("malformed administrator password hash")

    if algorithm != ALGORITHM or iterations < 1:
        raise InvalidHashError("malformed administrator password hash")

    return hmac.compare_digest(_derive(password, salt, iterations), expected)
