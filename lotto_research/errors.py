"""
Error types shared by the generation and statistics services.
"""


class RangeError(ValueError):
    """Raised when a numeric range is empty (min > max)."""


class InvalidRangeError(RangeError):
    """Raised when more distinct numbers are requested than the range holds."""

    def __init__(self, min_value: int, max_value: int, count: int):
        self.min_value = min_value
        self.max_value = max_value
        self.count = count
        super().__init__(
            f"Range {min_value}..{max_value} is too small for {count} distinct numbers"
        )


class ExternalEntropyUnavailable(RuntimeError):
    """External true-random source failed, timed out or returned garbage."""


class ConstraintExhaustion(RuntimeError):
    """Acceptance/rejection search ran out of attempts without a valid candidate."""

    def __init__(self, strategy: str, attempts: int):
        self.strategy = strategy
        self.attempts = attempts
        super().__init__(f"{strategy}: no valid combination after {attempts} attempts")
