"""bitx-config: Hierarchical .bitx configuration resolution for coding agents.

This library locates and merges scoped configuration across a workspace:
- Global (~/.bitx/)
- Project root (<root>/.bitx/)
- Nested subfolders (<root>/**/.bitx/, discovered by file search)

It also classifies paths against a fixed set of write-protected configuration
patterns, so callers can ask for approval before an agent modifies them.

Public API:
    PathResolver: Global/project directory locations (injectable home)
    DirectoryDiscoverer: Subfolder discovery and full directory ordering
    ConfigLoader: Reads and merges global/project configuration files
    ProtectionMatcher: Write-protection classification
    Scope, ConfigDirectory, ConfigDocument, MergedConfig, ProtectionRecord: Data models
    ConfigError, ConfigFileError, SearchError: Exception types

Example:
    ```python
    from bitx_config import ConfigLoader, DirectoryDiscoverer, ProtectionMatcher

    config = ConfigLoader().load("rules/rules.md", "/work/app")
    print(config.merged)

    directories = DirectoryDiscoverer().all_directories("/work/app")

    matcher = ProtectionMatcher("/work/app")
    matcher.is_protected(".bitx/modes.yaml")  # True
    ```
"""

from .discovery import DirectoryDiscoverer
from .exceptions import ConfigError
from .exceptions import ConfigFileError
from .exceptions import SearchError
from .loader import ConfigLoader
from .loader import directory_exists
from .loader import file_exists
from .loader import load_configuration
from .loader import read_file_if_exists
from .models import ConfigDirectory
from .models import ConfigDocument
from .models import MergedConfig
from .models import ProtectionRecord
from .models import Scope
from .paths import CONFIG_DIR_NAME
from .paths import PathResolver
from .protection import PROTECTED_PATTERNS
from .protection import ProtectionMatcher
from .search import FileSearch
from .search import RipgrepSearch
from .search import SearchHit
from .search import SearchResult
from .utils import deep_merge
from .utils import merge_text

__version__ = "0.1.0"

__all__ = [
    "CONFIG_DIR_NAME",
    "PROTECTED_PATTERNS",
    "PathResolver",
    "DirectoryDiscoverer",
    "ConfigLoader",
    "ProtectionMatcher",
    "FileSearch",
    "RipgrepSearch",
    "SearchHit",
    "SearchResult",
    "Scope",
    "ConfigDirectory",
    "ConfigDocument",
    "MergedConfig",
    "ProtectionRecord",
    "directory_exists",
    "file_exists",
    "read_file_if_exists",
    "load_configuration",
    "deep_merge",
    "merge_text",
    "ConfigError",
    "ConfigFileError",
    "SearchError",
]
