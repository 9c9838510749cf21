"""Custom exceptions for the endpoint comparison."""


class ComparisonExecutionError(Exception):
    """Custom exception for comparison run failures."""
    pass


class ConfigurationError(Exception):
    """Exception raised when the run configuration is unusable."""
    pass


class ResultLoadError(Exception):
    """Exception raised when an exported result cannot be read back."""
    pass
