"""Exception types raised by the demo application."""


class DemoError(Exception):
    """Base class for all demo application errors."""


class ConfigurationError(DemoError):
    """Raised when the configuration file cannot be loaded or validated."""


class DatabaseConnectionError(DemoError):
    """Raised when the database connection check fails and the run must stop."""
