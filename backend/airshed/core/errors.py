"""Exceptions raised by the airshed simulation core."""


class InvalidInputError(ValueError):
    """Raised when raw inputs fail validation at a core boundary.

    Collects every problem found so callers can report them together.
    """

    def __init__(self, errors: list[str]):
        self.errors: list[str] = list(errors)
        super().__init__("; ".join(self.errors))


class StateInvariantViolation(RuntimeError):
    """Raised when a computed pool or PM component is negative or non-finite.

    The per-step floor at zero means this should never fire; seeing it
    points at a formula or ordering bug in the day update.
    """
