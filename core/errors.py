class AdapterError(RuntimeError):
    """Raised by data adapters when a lookup or update cannot be served."""


class BoardDataError(ValueError):
    """Raised when a board document cannot be parsed into entities."""
