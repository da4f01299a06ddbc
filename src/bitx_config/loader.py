"""Loading of configuration files from the global and project scopes."""

import logging
import stat
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigFileError
from .models import ConfigDirectory
from .models import ConfigDocument
from .models import MergedConfig
from .paths import PathResolver
from .utils import deep_merge

logger = logging.getLogger(__name__)

# Treated as absence rather than failure
_ABSENT = (FileNotFoundError, NotADirectoryError)
_ABSENT_ON_READ = (FileNotFoundError, NotADirectoryError, IsADirectoryError)


def directory_exists(path: str | Path) -> bool:
    """Check whether path is an existing directory.

    Raises:
        OSError: For anything other than not-found / not-a-directory
    """
    try:
        return stat.S_ISDIR(Path(path).stat().st_mode)
    except _ABSENT:
        return False


def file_exists(path: str | Path) -> bool:
    """Check whether path is an existing regular file.

    Raises:
        OSError: For anything other than not-found / not-a-directory
    """
    try:
        return stat.S_ISREG(Path(path).stat().st_mode)
    except _ABSENT:
        return False


def read_file_if_exists(path: str | Path) -> str | None:
    """Read a UTF-8 text file, returning None if it isn't there.

    Missing files, a non-directory parent component, and a directory in place
    of the file all count as absent. Bytes that are not valid UTF-8 are
    replaced with U+FFFD rather than failing the read.

    Raises:
        OSError: Permission, disk and other unexpected errors
    """
    try:
        return Path(path).read_text(encoding="utf-8", errors="replace")
    except _ABSENT_ON_READ:
        return None


class ConfigLoader:
    """Reads configuration files from the global and project .bitx directories.

    Exactly two sources are consulted per call. Subfolder aggregation is
    composed on top by reading each directory (see collect_documents).

    Args:
        resolver: PathResolver supplying global/project locations
    """

    def __init__(self, resolver: PathResolver | None = None):
        self.resolver = resolver or PathResolver()

    def load(self, relative_path: str, root: str | Path) -> MergedConfig:
        """Load one relative file from both scopes, project overriding global.

        Args:
            relative_path: Path inside each .bitx directory (e.g. "rules/rules.md")
            root: Workspace root

        Returns:
            MergedConfig with global and project content; merged text derived

        Raises:
            OSError: If either read fails unexpectedly (no partial result)
        """
        global_path = self.resolver.global_directory() / relative_path
        project_path = self.resolver.project_directory(root) / relative_path

        global_content = read_file_if_exists(global_path)
        project_content = read_file_if_exists(project_path)

        logger.debug(
            f"Loaded {relative_path}: global={'found' if global_content is not None else 'absent'}, "
            f"project={'found' if project_content is not None else 'absent'}"
        )
        return MergedConfig(global_content=global_content, project_content=project_content)

    def load_settings(self, relative_path: str, root: str | Path) -> dict[str, Any]:
        """Load a YAML settings file from both scopes and deep merge them.

        Project values override global values key by key; absent files
        contribute nothing.

        Args:
            relative_path: Path inside each .bitx directory (e.g. "config/settings.yaml")
            root: Workspace root

        Returns:
            Merged settings dictionary

        Raises:
            ConfigFileError: If a file is not valid YAML or not a mapping
        """
        merged: dict[str, Any] = {}

        for directory in self.resolver.ordered_directories(root):
            settings = self._read_yaml(directory / relative_path)
            if settings:
                merged = deep_merge(merged, settings)

        return merged

    def collect_documents(
        self, relative_path: str, directories: Iterable[ConfigDirectory]
    ) -> list[ConfigDocument]:
        """Read one relative file from each directory, in the given order.

        Absent files yield documents with content None, so the result always
        lines up with the directories passed in.

        Args:
            relative_path: Path inside each directory
            directories: Directories in resolution order

        Returns:
            One ConfigDocument per directory
        """
        documents = []
        for directory in directories:
            content = read_file_if_exists(directory.path / relative_path)
            documents.append(
                ConfigDocument(
                    scope=directory.scope,
                    relative_path=relative_path,
                    content=content,
                    directory=directory.path,
                )
            )

        found = sum(1 for document in documents if document.exists)
        logger.info(f"Collected {relative_path} from {found} of {len(documents)} configuration directories")
        return documents

    # ===== Private Helpers =====

    def _read_yaml(self, path: Path) -> dict[str, Any] | None:
        """Read a YAML mapping.

        Returns:
            Dictionary from YAML, {} for an empty file, None if absent

        Raises:
            ConfigFileError: If the content is not a YAML mapping
        """
        text = read_file_if_exists(path)
        if text is None:
            return None

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigFileError(f"Failed to parse configuration from {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigFileError(f"Configuration in {path} must be a mapping, got {type(data).__name__}")
        return data


def load_configuration(relative_path: str, root: str | Path) -> MergedConfig:
    """Load a configuration file using the default home directory."""
    return ConfigLoader().load(relative_path, root)
