"""Capsule - project context loading for smart-contract projects."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("capsule-project")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
