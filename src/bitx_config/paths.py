"""Canonical locations of the global and project .bitx directories."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from .models import Scope

CONFIG_DIR_NAME = ".bitx"


@dataclass(frozen=True)
class PathResolver:
    """Computes configuration directory paths for a workspace.

    Pure path arithmetic: nothing here touches the filesystem. The home
    accessor is injected so callers (and tests) can pin the global location.

    Attributes:
        home: Callable returning the user's home directory
        dir_name: Reserved folder name used at every scope

    Example:
        ```python
        resolver = PathResolver(home=lambda: Path("/mock/home"))
        resolver.global_directory()              # /mock/home/.bitx
        resolver.project_directory("/work/app")  # /work/app/.bitx
        ```
    """

    home: Callable[[], Path] = Path.home
    dir_name: str = CONFIG_DIR_NAME

    def global_directory(self) -> Path:
        """Get the user-global .bitx directory.

        Returns:
            Home directory joined with the reserved folder name
        """
        return Path(self.home()) / self.dir_name

    def project_directory(self, root: str | Path) -> Path:
        """Get the .bitx directory at the workspace root.

        The directory is not required to exist.

        Args:
            root: Workspace root

        Returns:
            Root joined with the reserved folder name
        """
        return Path(root) / self.dir_name

    def ordered_directories(self, root: str | Path) -> list[Path]:
        """Get [global, project] directories in resolution order.

        Args:
            root: Workspace root

        Returns:
            Two-element list, global first
        """
        return [self.global_directory(), self.project_directory(root)]

    def scope_of(self, directory: str | Path, root: str | Path) -> Scope:
        """Classify a .bitx directory by scope.

        Uses exact comparison of resolved paths, so a home directory that
        happens to contain ".bitx" in its name is never mistaken for the
        global directory.

        Args:
            directory: A .bitx directory path
            root: Workspace root

        Returns:
            GLOBAL, PROJECT or SUBFOLDER

        Raises:
            ValueError: If directory is neither global nor below root
        """
        resolved = Path(directory).resolve()

        if resolved == self.global_directory().resolve():
            return Scope.GLOBAL
        if resolved == self.project_directory(root).resolve():
            return Scope.PROJECT
        if resolved.is_relative_to(Path(root).resolve()):
            return Scope.SUBFOLDER

        raise ValueError(f"{directory} is not a configuration directory for {root}")
