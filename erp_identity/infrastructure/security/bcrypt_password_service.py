"""PasswordHashingProtocol backed by bcrypt.

The cost factor comes from Settings.bcrypt_rounds. Each step doubles the
work: 10 is roughly 60ms per hash, 12 (the default) roughly 250ms.
"""

import bcrypt

MIN_COST_FACTOR = 10
MAX_COST_FACTOR = 20


class BcryptPasswordService:
    """Salted bcrypt hashes for passwords and temporary credentials.

    Args:
        cost_factor: bcrypt log2 rounds, MIN_COST_FACTOR..MAX_COST_FACTOR.

    Raises:
        ValueError: If cost_factor is out of range.
    """

    def __init__(self, cost_factor: int = 12) -> None:
        if not MIN_COST_FACTOR <= cost_factor <= MAX_COST_FACTOR:
            raise ValueError(
                f"Cost factor must be between {MIN_COST_FACTOR} and {MAX_COST_FACTOR}, "
                f"got {cost_factor}"
            )
        self._rounds = cost_factor

    def hash_password(self, password: str) -> str:
        """60-character "$2b$<cost>$..." hash with a fresh salt."""
        hashed = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self._rounds))
        return hashed.decode()

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Constant-time check; a malformed stored hash counts as a mismatch."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            return False
