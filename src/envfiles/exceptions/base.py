"""Base exception classes for envfiles.

All envfiles exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery
"""

from typing import Any, Dict, Optional


class EnvFilesError(Exception):
    """Base exception for all envfiles errors.

    Attributes:
        code: Machine-readable error code (e.g., "PROPERTIES_PARSE_ERROR")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error string."""
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(EnvFilesError):
    """Raised when loader settings are invalid or incomplete."""

    def __init__(
        self, message: str, code: str = "CONFIGURATION_ERROR", details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(code=code, message=message, details=details)


class DirectoryNotFoundError(EnvFilesError):
    """The resolved directory does not exist or is not a directory.

    The loader treats this as "zero files"; it is only surfaced through
    batch outcomes and console diagnostics.
    """

    def __init__(self, path: str, details: Optional[Dict[str, Any]] = None):
        self.path = path
        super().__init__(
            code="DIRECTORY_NOT_FOUND",
            message=f"Directory not found: {path}",
            details={"path": path, **(details or {})},
        )


class FileReadError(EnvFilesError):
    """A property file could not be opened or read."""

    def __init__(self, path: str, reason: str, details: Optional[Dict[str, Any]] = None):
        self.path = path
        super().__init__(
            code="FILE_READ_ERROR",
            message=f"Unable to read {path}: {reason}",
            details={"path": path, **(details or {})},
        )


class PropertiesParseError(EnvFilesError):
    """Properties text is malformed.

    Raised for an unterminated line continuation at end of input and for
    malformed \\uXXXX escapes.
    """

    def __init__(self, message: str, line: int, source: Optional[str] = None):
        self.line = line
        self.source = source
        details: Dict[str, Any] = {"line": line}
        if source:
            details["source"] = source
        super().__init__(code="PROPERTIES_PARSE_ERROR", message=message, details=details)


class CloseError(EnvFilesError):
    """Releasing a file handle failed. Logged only, never changes an outcome."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(
            code="CLOSE_ERROR",
            message=f"Unable to close {path}: {reason}",
            details={"path": path},
        )
