class FileAnalysisError(Exception):
    """Base exception for file analysis errors."""


class ConfigurationError(FileAnalysisError):
    """Raised when an action or hash state cannot be built from its configuration."""
