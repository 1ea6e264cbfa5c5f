"""Exception types raised by the engine."""


class JacksError(Exception):
    """Base class for all engine errors."""


class InvalidInputError(JacksError, ValueError):
    """Malformed card, wrong hand size, or out-of-range setting."""


class EmptyDeckError(JacksError, IndexError):
    """Dealing from a deck with no cards left."""


class PaytableNotFoundError(JacksError, LookupError):
    """Unknown paytable id."""


class PaytableValidationError(JacksError, ValueError):
    """
    One or more structural paytable problems.

    All problems are collected in ``errors`` rather than failing on
    the first one.
    """

    def __init__(self, message: str, errors: list[str]):
        super().__init__(message)
        self.errors = errors


class SimulationStateError(JacksError, RuntimeError):
    """Operation not allowed in the engine's current state."""
