"""Directory-scoped property file discovery and environment merging.

``DirectoryPropertyLoader.load`` is the entry point a build host calls before
a build runs: it resolves the configured directory against the current
environment, reads every ``*.properties`` file directly inside it and returns
a merged copy of the environment. It never raises; on failure it reports to
the build console and hands back the caller's environment unchanged.

``load_batch`` exposes the per-file outcomes behind that decision so callers
can pick their own aggregation policy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, TextIO, Union

from envfiles.config import (
    DEFAULT_ENCODING,
    DEFAULT_PATH,
    DEFAULT_SUFFIX,
    LoaderSettings,
    LogSettings,
    MergePolicy,
    Settings,
)
from envfiles.exceptions import (
    CloseError,
    DirectoryNotFoundError,
    EnvFilesError,
    FileReadError,
)
from envfiles.logger import BuildConsoleLogger, Logger, create_logger, get_logger
from envfiles.macro import replace_macro
from envfiles.properties import load_properties


def is_property_file(name: str, suffix: str = DEFAULT_SUFFIX) -> bool:
    return name.endswith(suffix)


def configure_diagnostics(log_settings: LogSettings) -> Logger:
    """Rebuild the shared "envfiles" diagnostics logger from log settings."""
    return create_logger(
        name="envfiles",
        level=getattr(logging, log_settings.level.upper(), logging.INFO),
        log_file=log_settings.log_file,
        json_format=log_settings.json_format,
    )


def resolve_directory(directory_path: Optional[str], env: Mapping[str, str]) -> str:
    """Apply the workspace default and expand macros against env."""
    if directory_path is None or not directory_path.strip():
        directory_path = DEFAULT_PATH
    return replace_macro(directory_path, env) or ""


def discover_property_files(
    directory: Union[str, Path],
    suffix: str = DEFAULT_SUFFIX,
    sort_files: bool = True,
) -> List[Path]:
    """List property files directly inside directory.

    Sub-directories are never descended into, and entries that merely end in
    the suffix but are not regular files are skipped.

    Raises:
        DirectoryNotFoundError: If directory is missing or not a directory
        FileReadError: If the directory cannot be listed
    """
    path = Path(directory)
    if not path.is_dir():
        raise DirectoryNotFoundError(str(directory))
    try:
        files = [
            entry
            for entry in path.iterdir()
            if is_property_file(entry.name, suffix) and entry.is_file()
        ]
    except OSError as exc:
        raise FileReadError(str(directory), exc.strerror or str(exc)) from exc
    if sort_files:
        files.sort(key=lambda entry: entry.name)
    return files


@dataclass
class FileOutcome:
    """Result of reading one property file."""

    path: Path
    properties: Dict[str, str] = field(default_factory=dict)
    error: Optional[EnvFilesError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LoadResult:
    """Per-file outcomes of one directory scan.

    Attributes:
        directory: The resolved directory that was scanned
        outcomes: One entry per file read, in processing order
        error: Failure that prevented discovery (never DirectoryNotFoundError)
        directory_missing: The directory did not exist; treated as zero files
    """

    directory: str
    outcomes: List[FileOutcome] = field(default_factory=list)
    error: Optional[EnvFilesError] = None
    directory_missing: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and all(outcome.ok for outcome in self.outcomes)

    @property
    def failures(self) -> List[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    def merge(
        self,
        base: Mapping[str, str],
        policy: MergePolicy = MergePolicy.ALL_OR_NOTHING,
    ) -> Dict[str, str]:
        """Fold the outcomes into a copy of base; base itself is never touched.

        Later outcomes override earlier ones and base.
        """
        merged = dict(base)
        if self.error is not None:
            return merged
        if policy is MergePolicy.ALL_OR_NOTHING and not self.ok:
            return merged
        for outcome in self.outcomes:
            if outcome.ok:
                merged.update(outcome.properties)
        return merged


class DirectoryPropertyLoader:
    """Merge ``.properties`` files from one directory into an environment map.

    Example:
        loader = DirectoryPropertyLoader(console=BuildConsoleLogger(output=log))
        env = loader.load("$WORKSPACE/env", {"WORKSPACE": "/srv/ws"})
    """

    def __init__(
        self,
        console: Optional[Logger] = None,
        *,
        encoding: str = DEFAULT_ENCODING,
        merge_policy: Union[MergePolicy, str] = MergePolicy.ALL_OR_NOTHING,
        suffix: str = DEFAULT_SUFFIX,
        sort_files: bool = True,
        diagnostics: Optional[Logger] = None,
    ):
        """
        Args:
            console: Build console sink (default: prefixed lines on stdout,
                mirrored to diagnostics at debug level)
            encoding: Encoding used to read property files
            merge_policy: Aggregation policy when some files fail
            suffix: File name suffix selecting property files
            sort_files: Process files in name order
            diagnostics: Library logger (default: get_logger("envfiles"))
        """
        self.encoding = encoding
        self.merge_policy = MergePolicy.parse(merge_policy)
        self.suffix = suffix
        self.sort_files = sort_files
        self._log = diagnostics or get_logger("envfiles")
        self.console = console or BuildConsoleLogger(diagnostics=self._log)

    @classmethod
    def from_settings(
        cls,
        settings: Union[Settings, LoaderSettings],
        console: Optional[Logger] = None,
    ) -> "DirectoryPropertyLoader":
        """Build a loader from typed settings.

        A full Settings object also configures the diagnostics logger.
        """
        diagnostics = None
        if isinstance(settings, Settings):
            loader_settings = settings.loader
            diagnostics = configure_diagnostics(settings.log)
        else:
            loader_settings = settings
        return cls(
            console=console,
            encoding=loader_settings.encoding,
            merge_policy=loader_settings.merge_policy,
            suffix=loader_settings.suffix,
            sort_files=loader_settings.sort_files,
            diagnostics=diagnostics,
        )

    def load(self, directory_path: Optional[str], current_env: Mapping[str, str]) -> Dict[str, str]:
        """Return current_env merged with every property file in the directory.

        On any failure the result equals current_env. Never raises.
        """
        try:
            result = self.load_batch(directory_path, current_env)
            return result.merge(current_env, self.merge_policy)
        except Exception as exc:
            self.console.error(f"An error has occurred : {exc}")
            self._log.error("Unexpected failure loading property files", error=repr(exc))
            return dict(current_env)

    def load_batch(self, directory_path: Optional[str], current_env: Mapping[str, str]) -> LoadResult:
        """Scan the directory and read each property file, collecting outcomes.

        With the ALL_OR_NOTHING policy reading stops at the first failed file.
        """
        resolved = resolve_directory(directory_path, current_env)
        self.console.info(f"Loading properties from : {resolved}", path=resolved)

        try:
            files = discover_property_files(resolved, self.suffix, self.sort_files)
        except DirectoryNotFoundError as exc:
            self.console.warning(f"Directory not found : {resolved}", code=exc.code)
            return LoadResult(directory=resolved, directory_missing=True)
        except FileReadError as exc:
            self._report(exc)
            return LoadResult(directory=resolved, error=exc)

        result = LoadResult(directory=resolved)
        for path in files:
            outcome = self.read_file(path)
            result.outcomes.append(outcome)
            if not outcome.ok and self.merge_policy is MergePolicy.ALL_OR_NOTHING:
                break

        self._log.debug(
            "Property files processed",
            path=resolved,
            files=len(result.outcomes),
            failed=len(result.failures),
        )
        return result

    def read_file(self, path: Path) -> FileOutcome:
        """Read one property file. Errors are reported and returned, not raised."""
        self.console.info(f"Reading : {path.name}", path=str(path))
        try:
            stream = path.open("r", encoding=self.encoding, newline="")
        except OSError as exc:
            error = FileReadError(str(path), exc.strerror or str(exc))
            error.__cause__ = exc
            self._report(error)
            return FileOutcome(path=path, error=error)

        try:
            properties = load_properties(stream, source=path.name)
        except EnvFilesError as exc:
            self._report(exc)
            return FileOutcome(path=path, error=exc)
        except (OSError, UnicodeDecodeError) as exc:
            error = FileReadError(str(path), str(exc))
            error.__cause__ = exc
            self._report(error)
            return FileOutcome(path=path, error=error)
        finally:
            self._close(stream, path)
        return FileOutcome(path=path, properties=properties)

    def _close(self, stream: TextIO, path: Path) -> None:
        try:
            stream.close()
        except Exception as exc:
            error = CloseError(str(path), str(exc))
            self.console.warning("Unable to close file", code=error.code)
            self._log.warning("Unable to close environment file.", path=error.path, reason=str(exc))

    def _report(self, error: EnvFilesError) -> None:
        """Write the console line matching the failure kind."""
        cause = error.__cause__
        if isinstance(error, FileReadError) and isinstance(cause, FileNotFoundError):
            line = f"Files not found : {error.path}"
        elif isinstance(error, FileReadError):
            line = f"IO error : {error.message}"
        else:
            line = f"An error has occurred : {error}"
        self.console.error(line, code=error.code)
        self._log.warning(error.message, **error.details, code=error.code)


__all__ = [
    "DirectoryPropertyLoader",
    "FileOutcome",
    "configure_diagnostics",
    "LoadResult",
    "discover_property_files",
    "is_property_file",
    "resolve_directory",
]
