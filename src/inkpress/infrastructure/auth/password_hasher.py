"""Password hashing using Argon2.

Provides salted, deliberately slow password hashing and verification using
the Argon2id algorithm. The work factor comes from :class:`AuthConfig`.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from inkpress.core.config import AuthConfig
from inkpress.core.errors import ConfigurationError


class CredentialHasher:
    """Hashes and verifies account passwords.

    Every call to :meth:`hash` uses a fresh random salt, so hashing the same
    password twice produces different outputs.
    """

    def __init__(self, config: AuthConfig) -> None:
        """Initialize the hasher.

        Args:
            config: Auth configuration providing the Argon2 cost parameters.

        Raises:
            ConfigurationError: If the cost parameters are rejected by Argon2.
        """
        try:
            self._hasher = PasswordHasher(
                time_cost=config.hash_time_cost,
                memory_cost=config.hash_memory_kib,
                parallelism=config.hash_parallelism,
            )
            # Argon2 validates its parameters lazily; force it now.
            self._dummy_hash = self._hasher.hash("inkpress-dummy-password")
        except Exception as e:
            raise ConfigurationError(f"Invalid password hashing parameters: {e}") from e

    @property
    def dummy_hash(self) -> str:
        """A valid hash no real password matches, for timing-safe misses."""
        return self._dummy_hash

    def hash(self, password: str) -> str:
        """Hash a password using Argon2id.

        Args:
            password: The plaintext password to hash.

        Returns:
            The encoded hash string.

        Example:
            >>> hasher.hash("SecureP@ss123!").startswith("$argon2id$")
            True
        """
        return self._hasher.hash(password)

    def verify(self, password: str, hashed: str) -> bool:
        """Verify a password against a stored hash.

        Malformed or foreign hashes verify as False instead of raising.

        Args:
            password: The plaintext password to verify.
            hashed: The stored hash.

        Returns:
            True if the password matches, False otherwise.
        """
        try:
            return self._hasher.verify(hashed, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check whether a hash was produced with outdated parameters."""
        try:
            return self._hasher.check_needs_rehash(hashed)
        except InvalidHashError:
            return True
