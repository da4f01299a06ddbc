"""Discovery of .bitx directories nested below a workspace root."""

import logging
import re
from pathlib import Path

import yaml

from .models import ConfigDirectory
from .models import Scope
from .paths import PathResolver
from .search import FileSearch
from .search import RipgrepSearch
from .search import run_search

logger = logging.getLogger(__name__)

EXCLUDE_GLOBS = ("node_modules/**", ".git/**")


class DirectoryDiscoverer:
    """Finds every .bitx directory that applies to a workspace.

    Resolution order (least to most specific):
    1. Global directory (~/.bitx)
    2. Project directory (<root>/.bitx)
    3. Subfolder directories, alphabetically by absolute path

    Nothing is cached; each call repeats the search.

    Args:
        resolver: PathResolver supplying global/project locations
        search: FileSearch used to enumerate files (default: ripgrep)
    """

    def __init__(self, resolver: PathResolver | None = None, search: FileSearch | None = None):
        self.resolver = resolver or PathResolver()
        self.search = search or RipgrepSearch()
        self._marker = re.compile(r"^(.+?)[/\\]" + re.escape(self.resolver.dir_name) + r"[/\\]")

    def discover_subfolders(self, root: str | Path) -> list[Path]:
        """Discover .bitx directories in subdirectories of the workspace.

        The root .bitx directory is never included (see
        PathResolver.project_directory). Discovery is best-effort: if the
        search fails for any reason the result is empty.

        Args:
            root: Workspace root

        Returns:
            Absolute .bitx directory paths sorted by path string, e.g.
            [<root>/package-a/.bitx, <root>/package-b/.bitx, <root>/packages/shared/.bitx]
        """
        root = Path(root)
        include = f"**/{self.resolver.dir_name}/**"
        result = run_search(self.search, root, [include], EXCLUDE_GLOBS)

        if not result.ok:
            logger.warning(f"Subfolder discovery failed under {root}, continuing without subfolders: {result.error}")
            return []

        root_dir = self.resolver.project_directory(root)
        found: set[Path] = set()

        for hit in result.hits:
            match = self._marker.match(hit.path)
            if not match:
                continue
            prefix = match.group(1).replace("\\", "/")
            candidate = root / prefix / self.resolver.dir_name
            if candidate != root_dir and candidate.is_relative_to(root):
                found.add(candidate)

        directories = sorted(found, key=str)
        logger.debug(f"Discovered {len(directories)} subfolder configuration directories under {root}")
        return directories

    def all_directories(self, root: str | Path) -> list[Path]:
        """Get [global, project, *subfolders] in override-priority order.

        Later entries are more specific.

        Args:
            root: Workspace root

        Returns:
            Directory paths, always starting with the global and project entries
        """
        return [*self.resolver.ordered_directories(root), *self.discover_subfolders(root)]

    def agents_directories(self, root: str | Path) -> list[Path]:
        """Get directories that may hold agent docs (AGENTS.md).

        The root always comes first, followed by the parent of each discovered
        subfolder .bitx directory in discovery order.

        Args:
            root: Workspace root

        Returns:
            Directories containing a .bitx folder, root first
        """
        return [Path(root), *(directory.parent for directory in self.discover_subfolders(root))]

    def config_directories(self, root: str | Path) -> list[ConfigDirectory]:
        """Get all directories as scoped ConfigDirectory records.

        Same order as all_directories().

        Args:
            root: Workspace root

        Returns:
            ConfigDirectory records with scope and subfolder relative path
        """
        root = Path(root)
        directories = [
            ConfigDirectory(Scope.GLOBAL, self.resolver.global_directory()),
            ConfigDirectory(Scope.PROJECT, self.resolver.project_directory(root)),
        ]
        for directory in self.discover_subfolders(root):
            relative = directory.parent.relative_to(root).as_posix()
            directories.append(ConfigDirectory(Scope.SUBFOLDER, directory, relative))

        logger.info(f"Resolved {len(directories)} configuration directories for {root}")
        return directories

    def dump_directories(self, root: str | Path) -> str:
        """Render the scoped directory listing as YAML for diagnostics.

        Args:
            root: Workspace root

        Returns:
            YAML document with a "directories" list
        """
        listing = [directory.to_dict() for directory in self.config_directories(root)]
        return yaml.safe_dump({"directories": listing}, default_flow_style=False, sort_keys=False)
