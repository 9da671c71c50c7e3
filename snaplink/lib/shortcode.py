"""Short code generation utilities."""

import secrets
import string


class ShortCodeGenerator:
    """Generate random, URL-safe short codes.

    Codes are drawn uniformly from a 64 character alphabet using the
    ``secrets`` CSPRNG. The generator never looks at the store; collisions
    surface as a unique-constraint failure on insert and the caller retries.
    """

    ALPHABET = string.ascii_letters + string.digits + "-_"

    DEFAULT_LENGTH = 8

    def __init__(self, default_length: int = DEFAULT_LENGTH):
        """Initialize short code generator.

        Args:
            default_length: Length of generated codes
        """
        if default_length < 1:
            raise ValueError("default_length must be positive")
        self.default_length = default_length

    def generate(self) -> str:
        """Return a new random short code of ``default_length`` characters."""
        return "".join(secrets.choice(self.ALPHABET) for _ in range(self.default_length))

    @classmethod
    def is_valid_format(cls, code: str) -> bool:
        """Check that a code only uses the URL-safe alphabet."""
        return bool(code) and all(c in cls.ALPHABET for c in code)
