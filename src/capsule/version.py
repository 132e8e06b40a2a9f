"""Semantic versions and the tool/project compatibility rule."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import total_ordering

from capsule.errors import InvalidVersionFormat

_VERSION_RE = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z.-]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z.-]+))?$"
)


_PreKey = tuple[int, tuple[tuple[int, int | str], ...]]


def _pre_key(pre: str | None) -> _PreKey:
    """Sort key for a pre-release tag; releases sort after any pre-release."""
    if pre is None:
        return (1, ())
    parts: list[tuple[int, int | str]] = []
    for ident in pre.split("."):
        # Numeric identifiers sort before alphanumeric ones
        parts.append((0, int(ident)) if ident.isdigit() else (1, ident))
    return (0, tuple(parts))


@total_ordering
@dataclass(frozen=True)
class Version:
    """A `MAJOR.MINOR.PATCH[-PRE][+BUILD]` version.

    Build metadata is kept for display but ignored by comparisons.
    """

    major: int
    minor: int
    patch: int
    pre: str | None = None
    build: str | None = field(default=None, compare=False)

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a semantic version string.

        Raises:
            InvalidVersionFormat: If the text is not a semantic version
        """
        match = _VERSION_RE.match(text.strip())
        if match is None:
            raise InvalidVersionFormat(text)
        return cls(
            major=int(match["major"]),
            minor=int(match["minor"]),
            patch=int(match["patch"]),
            pre=match["pre"],
            build=match["build"],
        )

    @classmethod
    def current(cls) -> Version:
        """Version of the running Capsule tool."""
        from capsule import __version__

        return cls.parse(__version__)

    def _key(self) -> tuple[int, int, int, _PreKey]:
        return (self.major, self.minor, self.patch, _pre_key(self.pre))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += f"-{self.pre}"
        if self.build:
            text += f"+{self.build}"
        return text


CompatibilityPolicy = Callable[[Version, Version], bool]


def is_compatible(tool: Version, project: Version) -> bool:
    """Default compatibility rule between the tool and a project.

    The tool must share the project's major version (and minor version
    while the major is 0) and must not be older than the project.
    """
    if tool.major != project.major:
        return False
    if tool.major == 0 and tool.minor != project.minor:
        return False
    return tool >= project
