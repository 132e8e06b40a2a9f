"""Project context: the loaded config plus the paths derived from it."""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import ValidationError

from capsule.config import Config, Deployment
from capsule.errors import (
    ConfigNotFound,
    ConfigParseError,
    DeploymentNotFound,
    DeploymentParseError,
    InvalidWorkspaceDir,
    UnrecognizedEnumValue,
    VersionMismatch,
)
from capsule.version import CompatibilityPolicy, Version, is_compatible

logger = logging.getLogger(__name__)

CONTRACTS_DIR = "contracts"
CONTRACTS_BUILD_DIR = "build"
MIGRATIONS_DIR = "migrations"
CONFIG_FILE = "capsule.toml"

TextReader = Callable[[Path], str]


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class _ParsableEnum(str, Enum):
    @classmethod
    def parse(cls, text: str) -> _ParsableEnum:
        """Parse a variant name, ignoring case.

        Raises:
            UnrecognizedEnumValue: If no variant matches
        """
        try:
            return cls(text.lower())
        except ValueError:
            raise UnrecognizedEnumValue(
                text, tuple(member.value for member in cls)
            ) from None


class BuildEnv(_ParsableEnum):
    """Build profile; the value is the build output subdirectory."""

    DEBUG = "debug"
    RELEASE = "release"


class DeployEnv(_ParsableEnum):
    """Target network; the value is the migrations subdirectory."""

    DEV = "dev"
    TESTNET = "testnet"
    MAINNET = "mainnet"


@dataclass(frozen=True)
class BuildConfig:
    build_env: BuildEnv
    always_debug: bool = False


@dataclass(frozen=True)
class Context:
    """Immutable project context.

    Only built through `load`, which guarantees the config file was read,
    parsed and declared a version compatible with this tool.
    """

    project_path: Path
    config: Config

    @classmethod
    def load(
        cls,
        path: str | Path,
        *,
        tool_version: Version | None = None,
        compatible: CompatibilityPolicy = is_compatible,
        read_text: TextReader = _read_text,
    ) -> Context:
        """Load the project rooted at `path`.

        Args:
            path: Project root directory
            tool_version: Version of the running tool, defaults to the
                installed Capsule version
            compatible: Rule deciding whether the tool can serve the project
            read_text: Reads a file as text

        Returns:
            Loaded context

        Raises:
            ConfigNotFound: If `capsule.toml` can't be read
            ConfigParseError: If `capsule.toml` is malformed
            InvalidVersionFormat: If the project version is not semver
            VersionMismatch: If the project version is incompatible
        """
        project_path = Path(path)
        config_path = project_path / CONFIG_FILE
        content = read_config_file(config_path, read_text=read_text)

        try:
            config = Config.from_toml(content)
        except (tomllib.TOMLDecodeError, ValidationError) as e:
            raise ConfigParseError(config_path, e) from e

        capsule_version = tool_version or Version.current()
        project_version = Version.parse(config.version)
        if not compatible(capsule_version, project_version):
            raise VersionMismatch(str(capsule_version), config.version)

        logger.debug(
            "Loaded project %s (version %s)", project_path, project_version
        )
        return cls(project_path=project_path, config=config)

    def workspace_dir(self) -> Path:
        """Root directory for the contracts workspace.

        Raises:
            InvalidWorkspaceDir: If `rust.workspace_dir` is neither "." nor
                "contracts"
        """
        workspace_dir = self.config.workspace_dir
        if workspace_dir is None or workspace_dir == ".":
            return self.project_path
        if workspace_dir == CONTRACTS_DIR:
            return self.project_path / CONTRACTS_DIR
        raise InvalidWorkspaceDir(workspace_dir)

    def contracts_path(self) -> Path:
        return self.project_path / CONTRACTS_DIR

    def contracts_build_dir(self) -> Path:
        return self.project_path / CONTRACTS_BUILD_DIR

    def contracts_build_path(self, env: BuildEnv) -> Path:
        return self.contracts_build_dir() / env.value

    def migrations_path(self, env: DeployEnv) -> Path:
        return self.project_path / MIGRATIONS_DIR / env.value

    def deployment_path(self) -> Path:
        return self.project_path / self.config.deployment

    def load_deployment(self, *, read_text: TextReader = _read_text) -> Deployment:
        """Load the deployment document named by the config.

        Raises:
            DeploymentNotFound: If the file can't be read
            DeploymentParseError: If the file is malformed
        """
        path = self.deployment_path()
        try:
            content = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise DeploymentNotFound(path, e) from e

        try:
            return Deployment.from_toml(content)
        except (tomllib.TOMLDecodeError, ValidationError) as e:
            logger.error("failed to parse %s", path)
            raise DeploymentParseError(path, e) from e


def read_config_file(path: Path, *, read_text: TextReader = _read_text) -> str:
    """Read a config file as text.

    Raises:
        ConfigNotFound: If the file is missing or unreadable
    """
    try:
        return read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigNotFound(path, e) from e


def write_config_file(path: Path, content: str) -> None:
    """Write config text in a single filesystem call."""
    path.write_text(content, encoding="utf-8")
