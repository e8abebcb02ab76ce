"""Build lifecycle glue.

A host drives one build through three calls::

    wrapper = EnvFileBuildWrapper("$WORKSPACE/env")
    environment = wrapper.set_up(build)          # before the build runs
    environment.build_env_vars(build.env)        # host asks for variables
    EnvFilesRunListener().on_started(build)      # after the build starts

The merged map is attached to the build's own context and read back from
there, so concurrent builds never see each other's variables.
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, MutableMapping, Optional, Union

from envfiles.config import LoaderSettings, Settings, get_settings
from envfiles.loader import DirectoryPropertyLoader, configure_diagnostics
from envfiles.logger import BuildConsoleLogger, Logger, get_logger

DISPLAY_NAME = "Set environment variables through files in directory"
ENV_MAP_ATTRIBUTE = "envfiles.env_map"


def fix_empty(value: Optional[str]) -> Optional[str]:
    """Normalise blank configuration strings to None."""
    if value is None or not value.strip():
        return None
    return value


@dataclass
class BuildContext:
    """State owned by a single build execution.

    Attributes:
        env: The build's environment variables
        workspace: Workspace root; seeds WORKSPACE in env when given
        console: The build console
        attributes: Per-build data attached by extensions
        build_id: Identifier used in diagnostics
    """

    env: Dict[str, str] = field(default_factory=dict)
    workspace: Optional[str] = None
    console: Logger = field(
        default_factory=lambda: BuildConsoleLogger(diagnostics=get_logger("envfiles"))
    )
    attributes: Dict[str, Any] = field(default_factory=dict)
    build_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])

    def __post_init__(self):
        if self.workspace is not None:
            self.env.setdefault("WORKSPACE", str(self.workspace))

    def get_environment(self) -> Dict[str, str]:
        """Return the live environment of this build."""
        return self.env


class BuildEnvironment:
    """Environment contribution for one build, created by set_up."""

    def __init__(
        self,
        build: BuildContext,
        directory_path: Optional[str],
        loader: DirectoryPropertyLoader,
    ):
        self.build = build
        self.directory_path = directory_path
        self.loader = loader

    def build_env_vars(self, env: MutableMapping[str, str]) -> None:
        """Merge the directory's property files into env in place.

        A snapshot of the merged map is attached to the build so that
        EnvFilesRunListener can re-apply it after the build starts.
        """
        merged = self.loader.load(self.directory_path, env)
        env.update(merged)
        self.build.attributes[ENV_MAP_ATTRIBUTE] = dict(merged)


class EnvFileBuildWrapper:
    """Set environment variables from the property files in a directory."""

    display_name = DISPLAY_NAME

    def __init__(
        self,
        directory_path: Optional[str] = None,
        settings: Optional[Union[Settings, LoaderSettings]] = None,
    ):
        """
        Args:
            directory_path: Directory to scan, may contain $VAR macros;
                blank falls back to settings, then to $WORKSPACE
            settings: Loader settings, or full Settings whose log section
                also reconfigures diagnostics (default: get_settings(),
                i.e. ENVFILES_* variables and ./.env)
        """
        if settings is None:
            self.settings = get_settings().loader
            self._log = get_logger("envfiles")
        elif isinstance(settings, Settings):
            self.settings = settings.loader
            self._log = configure_diagnostics(settings.log)
        else:
            self.settings = settings
            self._log = get_logger("envfiles")
        self._directory_path = fix_empty(directory_path)

    @property
    def directory_path(self) -> Optional[str]:
        return self._directory_path or self.settings.directory_path

    @directory_path.setter
    def directory_path(self, value: Optional[str]) -> None:
        self._directory_path = fix_empty(value)

    def is_applicable(self, build: BuildContext) -> bool:
        return True

    def set_up(self, build: BuildContext) -> BuildEnvironment:
        self._log.debug("Reading environment variables from directory", build_id=build.build_id)
        loader = DirectoryPropertyLoader.from_settings(self.settings, console=build.console)
        return BuildEnvironment(build, self.directory_path, loader)


class EnvFilesRunListener:
    """Re-apply a build's loaded variables once the build has started."""

    def __init__(self):
        self._log = get_logger("envfiles")

    def on_started(self, build: BuildContext) -> None:
        env_map = build.attributes.get(ENV_MAP_ATTRIBUTE)
        if not env_map:
            self._log.debug("No loaded variables attached to build", build_id=build.build_id)
            return
        build.get_environment().update(env_map)


__all__ = [
    "DISPLAY_NAME",
    "ENV_MAP_ATTRIBUTE",
    "BuildContext",
    "BuildEnvironment",
    "EnvFileBuildWrapper",
    "EnvFilesRunListener",
    "fix_empty",
]
