class ValidationError(Exception):
    """Input rejected before anything is computed or written.

    ``rule`` names the check that failed so callers can map it to a form
    field; ``message`` is shown to the user verbatim.
    """

    def __init__(self, rule: str, message: str):
        super().__init__(message)
        self.rule = rule
        self.message = message


class StorageError(Exception):
    """A single read or write against the store failed."""


class RollbackError(Exception):
    """A compensating write failed; the data set may be inconsistent."""
