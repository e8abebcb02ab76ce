"""envfiles - load build environment variables from .properties files.

This package provides:
- loader: directory scan and environment merge (DirectoryPropertyLoader)
- properties: parser for the .properties text format
- macro: $NAME / ${NAME} expansion
- build: lifecycle glue for CI hosts (wrapper and run listener)
- config: typed settings from the environment and .env files
- logger: diagnostics logger and build console sink
- exceptions: structured error classes
"""

__version__ = "1.0.0"

from envfiles.build import (
    BuildContext,
    BuildEnvironment,
    EnvFileBuildWrapper,
    EnvFilesRunListener,
)
from envfiles.config import (
    EnvLoader,
    LoaderSettings,
    LogSettings,
    MergePolicy,
    Settings,
    get_settings,
    reset_settings,
)
from envfiles.exceptions import (
    CloseError,
    ConfigurationError,
    DirectoryNotFoundError,
    EnvFilesError,
    FileReadError,
    PropertiesParseError,
)
from envfiles.loader import (
    DirectoryPropertyLoader,
    FileOutcome,
    LoadResult,
    discover_property_files,
    is_property_file,
)
from envfiles.logger import BuildConsoleLogger, Logger, StructuredLogger, get_logger
from envfiles.macro import replace_macro
from envfiles.properties import load_properties, loads_properties

__all__ = [
    "__version__",
    # Loader
    "DirectoryPropertyLoader",
    "FileOutcome",
    "LoadResult",
    "discover_property_files",
    "is_property_file",
    # Parsing and expansion
    "loads_properties",
    "load_properties",
    "replace_macro",
    # Build lifecycle
    "BuildContext",
    "BuildEnvironment",
    "EnvFileBuildWrapper",
    "EnvFilesRunListener",
    # Config
    "EnvLoader",
    "LoaderSettings",
    "LogSettings",
    "MergePolicy",
    "Settings",
    "get_settings",
    "reset_settings",
    # Logger
    "Logger",
    "StructuredLogger",
    "BuildConsoleLogger",
    "get_logger",
    # Exceptions
    "EnvFilesError",
    "ConfigurationError",
    "DirectoryNotFoundError",
    "FileReadError",
    "PropertiesParseError",
    "CloseError",
]
