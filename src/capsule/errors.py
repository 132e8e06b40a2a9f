"""Exceptions raised while loading a Capsule project."""

from __future__ import annotations

from pathlib import Path


class CapsuleError(Exception):
    """Base class for project context errors."""


class ConfigNotFound(CapsuleError):
    """The project config file is missing or unreadable."""

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(
            f"Can't find '{path}', current directory is not a project. "
            f"error: {cause!r}"
        )


class ConfigParseError(CapsuleError):
    """The project config file is not a valid config document."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to parse '{path}': {cause}")


class InvalidVersionFormat(CapsuleError, ValueError):
    """A version string is not a semantic version."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid version format: {value!r}")


class VersionMismatch(CapsuleError):
    """The project requires a Capsule version this tool can't serve."""

    def __init__(self, tool_version: str, project_version: str) -> None:
        self.tool_version = tool_version
        self.project_version = project_version
        super().__init__(
            "Please use the right capsule version, "
            f"Capsule version: {tool_version}, Project version: {project_version}"
        )


class InvalidWorkspaceDir(CapsuleError):
    """`workspace_dir` holds a value outside the supported layouts."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Invalid `workspace_dir` config: {value!r}, "
            'only allowed "." or "contracts".'
        )


class DeploymentNotFound(CapsuleError):
    """The deployment document named by the config can't be read."""

    def __init__(self, path: Path, cause: BaseException | None = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Can't read deployment file '{path}': {cause}")


class DeploymentParseError(CapsuleError):
    """The deployment document is not a valid deployment."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to parse deployment file '{path}': {cause}")


class UnrecognizedEnumValue(CapsuleError, ValueError):
    """Text that doesn't name any variant of an environment enum."""

    def __init__(self, value: str, choices: tuple[str, ...] = ()) -> None:
        self.value = value
        self.choices = choices
        message = f"Unrecognized value: {value!r}"
        if choices:
            message += f", expected one of: {', '.join(choices)}"
        super().__init__(message)
