"""Common exceptions for envfiles.

All exceptions include structured error information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Usage:
    from envfiles.exceptions import (
        EnvFilesError,
        ConfigurationError,
        DirectoryNotFoundError,
        FileReadError,
        PropertiesParseError,
        CloseError,
    )
"""

from envfiles.exceptions.base import (
    CloseError,
    ConfigurationError,
    DirectoryNotFoundError,
    EnvFilesError,
    FileReadError,
    PropertiesParseError,
)

__all__ = [
    "EnvFilesError",
    "ConfigurationError",
    "DirectoryNotFoundError",
    "FileReadError",
    "PropertiesParseError",
    "CloseError",
]
