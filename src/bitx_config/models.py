"""Data models for bitx-config."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .utils import merge_text


class Scope(Enum):
    """Configuration scope enumeration.

    Scopes are ordered from least to most specific: the user-global
    directory, the project root directory, then any nested subfolder.
    """

    GLOBAL = "global"
    PROJECT = "project"
    SUBFOLDER = "subfolder"

    @property
    def rank(self) -> int:
        """Position in resolution order (0 = least specific).

        Returns:
            0 for GLOBAL, 1 for PROJECT, 2 for SUBFOLDER
        """
        return _SCOPE_RANK[self]


_SCOPE_RANK = {Scope.GLOBAL: 0, Scope.PROJECT: 1, Scope.SUBFOLDER: 2}


@dataclass(frozen=True)
class ConfigDirectory:
    """A .bitx directory and the scope it was found at.

    Attributes:
        scope: Scope of the directory
        path: Absolute path to the directory (not checked for existence)
        relative_path: Subfolder path relative to the workspace root, only set
            for SUBFOLDER entries (e.g. "packages/shared")
    """

    scope: Scope
    path: Path
    relative_path: str | None = None

    @property
    def sort_key(self) -> tuple[int, str]:
        """Ordering key: scope rank first, then subfolder relative path.

        Returns:
            Tuple of (scope rank, relative path or "")
        """
        return (self.scope.rank, self.relative_path or "")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain mapping suitable for YAML output.

        Returns:
            Dictionary with scope, path and (for subfolders) relative_path
        """
        data: dict[str, Any] = {"scope": self.scope.value, "path": str(self.path)}
        if self.relative_path is not None:
            data["relative_path"] = self.relative_path
        return data


@dataclass(frozen=True)
class ConfigDocument:
    """Content of one relative file read from one configuration directory.

    A None content means the file is absent, which is not an error.
    """

    scope: Scope
    relative_path: str
    content: str | None = None
    directory: Path | None = None

    @property
    def exists(self) -> bool:
        """Whether the file was found in its directory."""
        return self.content is not None


@dataclass(frozen=True)
class MergedConfig:
    """Global and project content for one relative path.

    Attributes:
        global_content: Text from the global directory, or None if absent
        project_content: Text from the project directory, or None if absent

    The merged text is derived on access and never stored.
    """

    global_content: str | None = None
    project_content: str | None = None

    @property
    def merged(self) -> str:
        """Merged text, recomputed from both sides on every access."""
        return merge_text(self.global_content, self.project_content)

    def to_dict(self) -> dict[str, str | None]:
        """Convert to a mapping with global, project and merged keys.

        Returns:
            Dictionary mirroring the load result
        """
        return {
            "global": self.global_content,
            "project": self.project_content,
            "merged": self.merged,
        }


@dataclass(frozen=True)
class ProtectionRecord:
    """A path annotated with its write-protection status."""

    path: str
    is_protected: bool
