class InvalidArgumentError(ValueError):
    """Raised when a configuration value is rejected by validation."""


class TableNotFound(LookupError):
    """Raised when no table is registered under the requested id."""
