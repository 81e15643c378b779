"""
Credential hashing - bcrypt salt generation, derivation and verification.

Security Design - Timing Oracle Prevention:
------------------------------------------
1. **bcrypt.checkpw()**: Recomputes the hash with the salt embedded in the
   stored value and compares in constant time. Its cost (~100ms at cost
   factor 10) dominates response time.

2. **Dummy hash**: When a login names an unknown user, the service still
   runs one full verification against a dummy hash made with the same cost
   factor as real hashes, so an unknown username and a wrong password take
   the same time.

bcrypt only consumes the first 72 bytes of its input; passwords are encoded
as UTF-8 and cut to that length before both hashing and verifying so the two
operations always see the same bytes.
"""

from dataclasses import dataclass, field

import bcrypt

BCRYPT_MAX_PASSWORD_BYTES = 72

_DUMMY_PASSWORD = b"dummy_password_for_timing_safety"


def _encode(password: str) -> bytes:
    return password.encode()[:BCRYPT_MAX_PASSWORD_BYTES]


@dataclass
class CredentialHasher:
    """
    Derives and verifies password hashes.

    This is the only component that handles a plaintext password beyond
    the duration of a register/login call.
    """

    rounds: int = 10
    _dummy_hash: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Built up front so the first unknown-user login costs no extra hashpw.
        self._dummy_hash = bcrypt.hashpw(_DUMMY_PASSWORD, bcrypt.gensalt(rounds=self.rounds))

    def generate_salt(self) -> str:
        """Fresh random salt, independent across calls."""
        return bcrypt.gensalt(rounds=self.rounds).decode()

    def hash(self, password: str, salt: str) -> str:
        """
        Derive the stored hash for ``password``.

        Deterministic for a given (password, salt) pair. The salt is
        embedded in the returned string, so verify() needs only the hash.
        """
        return bcrypt.hashpw(_encode(password), salt.encode()).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check ``password`` against a stored hash in constant time.

        Raises:
            ValueError: If ``password_hash`` is not a bcrypt hash
        """
        return bcrypt.checkpw(_encode(password), password_hash.encode())

    def verify_dummy(self, password: str) -> bool:
        """Spend one verification on the dummy hash. Always False."""
        bcrypt.checkpw(_encode(password), self._dummy_hash)
        return False
