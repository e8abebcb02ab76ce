"""Dataclass-based settings for envfiles.

Settings are read from the environment (optionally seeded from a .env file)
under a configurable prefix, ``ENVFILES`` by default.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Mapping, Optional, Union

from envfiles.config.env_loader import EnvLoader
from envfiles.exceptions import ConfigurationError

DEFAULT_PREFIX = "ENVFILES"
DEFAULT_PATH = "$WORKSPACE"
DEFAULT_SUFFIX = ".properties"
# Properties files are ISO-8859-1 by convention
DEFAULT_ENCODING = "latin-1"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class MergePolicy(str, Enum):
    """How a batch with failed files is folded into the environment.

    ALL_OR_NOTHING: any failed file discards the whole batch
    BEST_EFFORT: successful files are merged, failed files are skipped
    """

    ALL_OR_NOTHING = "all_or_nothing"
    BEST_EFFORT = "best_effort"

    @classmethod
    def parse(cls, value: Union[str, "MergePolicy"]) -> "MergePolicy":
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("-", "_")
        try:
            return cls(normalized)
        except ValueError:
            raise ConfigurationError(
                f"Unknown merge policy: {value!r}",
                details={"allowed": [p.value for p in cls]},
            ) from None


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}", details={"variable": name})


@dataclass
class LoaderSettings:
    """Directory loader configuration

    Attributes:
        directory_path: Directory to scan; None means DEFAULT_PATH
        encoding: Text encoding used to read property files
        merge_policy: Aggregation policy for batches with failed files
        sort_files: Process files in name order (deterministic last-wins)
        suffix: File name suffix that marks a property file
    """

    directory_path: Optional[str] = None
    encoding: str = DEFAULT_ENCODING
    merge_policy: MergePolicy = MergePolicy.ALL_OR_NOTHING
    sort_files: bool = True
    suffix: str = DEFAULT_SUFFIX

    def __post_init__(self):
        if self.directory_path is not None and not self.directory_path.strip():
            self.directory_path = None
        self.merge_policy = MergePolicy.parse(self.merge_policy)
        if not self.suffix:
            raise ConfigurationError("File suffix must not be empty")
        try:
            "".encode(self.encoding)
        except LookupError:
            raise ConfigurationError(
                f"Unknown encoding: {self.encoding!r}", details={"encoding": self.encoding}
            ) from None

    @classmethod
    def from_mapping(cls, data: Mapping[str, str], prefix: str = DEFAULT_PREFIX) -> "LoaderSettings":
        """Build settings from an already loaded key/value mapping.

        Variables:
            {prefix}_DIRECTORY: Directory to scan
            {prefix}_ENCODING: File encoding (default: latin-1)
            {prefix}_MERGE_POLICY: all_or_nothing or best_effort
            {prefix}_SORT_FILES: true/false (default: true)
            {prefix}_SUFFIX: File suffix (default: .properties)
        """
        return cls(
            directory_path=data.get(f"{prefix}_DIRECTORY"),
            encoding=data.get(f"{prefix}_ENCODING") or DEFAULT_ENCODING,
            merge_policy=MergePolicy.parse(
                data.get(f"{prefix}_MERGE_POLICY") or MergePolicy.ALL_OR_NOTHING.value
            ),
            sort_files=_parse_bool(f"{prefix}_SORT_FILES", data.get(f"{prefix}_SORT_FILES"), True),
            suffix=data.get(f"{prefix}_SUFFIX") or DEFAULT_SUFFIX,
        )

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_PREFIX, env_file: Optional[Union[Path, str]] = None
    ) -> "LoaderSettings":
        """Load loader settings from a .env file and the OS environment."""
        return cls.from_mapping(EnvLoader(env_file, prefix=prefix).load(), prefix)


@dataclass
class LogSettings:
    """Logging configuration

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON lines instead of text
        log_file: Optional log file path
    """

    level: str = "INFO"
    json_format: bool = False
    log_file: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, str], prefix: str = DEFAULT_PREFIX) -> "LogSettings":
        """
        Variables:
            {prefix}_LOG_LEVEL: Logging level
            {prefix}_LOG_JSON: true for JSON output
            {prefix}_LOG_FILE: Optional log file
        """
        return cls(
            level=data.get(f"{prefix}_LOG_LEVEL", "INFO").upper(),
            json_format=_parse_bool(f"{prefix}_LOG_JSON", data.get(f"{prefix}_LOG_JSON"), False),
            log_file=data.get(f"{prefix}_LOG_FILE") or None,
        )


@dataclass
class Settings:
    """Complete envfiles settings

    Attributes:
        loader: Directory loader settings
        log: Logging settings
        prefix: Environment variable prefix used
    """

    loader: LoaderSettings = field(default_factory=LoaderSettings)
    log: LogSettings = field(default_factory=LogSettings)
    prefix: str = DEFAULT_PREFIX

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_PREFIX, env_file: Optional[Union[Path, str]] = None
    ) -> "Settings":
        """Load complete settings from a .env file and the OS environment.

        Args:
            prefix: Environment variable prefix (default: ENVFILES)
            env_file: Optional .env file; ./.env is used when present

        Raises:
            ConfigurationError: If any value is invalid
        """
        data = EnvLoader(env_file, prefix=prefix).load()
        return cls(
            loader=LoaderSettings.from_mapping(data, prefix),
            log=LogSettings.from_mapping(data, prefix),
            prefix=prefix,
        )


# Global settings storage per prefix
_global_settings: dict[str, Settings] = {}


def get_settings(
    prefix: str = DEFAULT_PREFIX,
    reload: bool = False,
    env_file: Optional[Union[Path, str]] = None,
) -> Settings:
    """Get or create the settings instance for a given prefix.

    Args:
        prefix: Environment variable prefix
        reload: Force re-reading the environment
        env_file: Optional .env file used when (re)loading
    """
    if reload or prefix not in _global_settings:
        _global_settings[prefix] = Settings.from_env(prefix=prefix, env_file=env_file)
    return _global_settings[prefix]


def reset_settings(prefix: Optional[str] = None) -> None:
    """Drop cached settings (all prefixes when prefix is None). Used by tests."""
    if prefix is None:
        _global_settings.clear()
    else:
        _global_settings.pop(prefix, None)
