"""Recursive file search used for subfolder discovery."""

import logging
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .exceptions import SearchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class SearchHit:
    """One entry returned by a file search, path relative to the search root."""

    path: str
    type: str = "file"


class FileSearch(Protocol):
    """Recursive file enumerator.

    Implementations must include hidden entries, follow symlinks, and raise
    on tool failure.
    """

    def search(
        self, root: Path, include_globs: Sequence[str], exclude_globs: Sequence[str]
    ) -> list[SearchHit]:
        """Enumerate files under root.

        Args:
            root: Directory to search
            include_globs: Globs a file must match
            exclude_globs: Globs that remove files from the result

        Returns:
            Hits with paths relative to root

        Raises:
            Exception: Any failure of the underlying tool
        """
        ...


@dataclass(frozen=True)
class SearchResult:
    """Outcome of a search: either hits, or the error that prevented them."""

    hits: tuple[SearchHit, ...] = ()
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Whether the search completed without error."""
        return self.error is None


def run_search(
    search: FileSearch, root: Path, include_globs: Sequence[str], exclude_globs: Sequence[str]
) -> SearchResult:
    """Run a search and capture its outcome as a SearchResult.

    Any exception raised by the search, cancellation surfaced as an error
    included, becomes a failed result. No retry is attempted.
    """
    try:
        hits = search.search(root, include_globs, exclude_globs)
    except Exception as e:
        return SearchResult(error=e)
    return SearchResult(hits=tuple(hits))


class RipgrepSearch:
    """FileSearch backed by the ripgrep binary.

    Runs `rg --files` from the search root so results come back relative
    to it.

    Args:
        binary: ripgrep executable name or path
        timeout: Seconds before the search is abandoned
    """

    def __init__(self, binary: str = "rg", timeout: float = DEFAULT_TIMEOUT):
        self.binary = binary
        self.timeout = timeout

    def build_args(self, include_globs: Sequence[str], exclude_globs: Sequence[str]) -> list[str]:
        """Build the ripgrep command line.

        Args:
            include_globs: Globs passed as -g patterns
            exclude_globs: Globs passed as negated -g patterns

        Returns:
            Argument vector starting with the ripgrep binary
        """
        argv = [self.binary, "--files", "--hidden", "--follow"]
        for pattern in include_globs:
            argv += ["-g", pattern]
        for pattern in exclude_globs:
            argv += ["-g", f"!{pattern}"]
        return argv

    def search(
        self, root: Path, include_globs: Sequence[str], exclude_globs: Sequence[str]
    ) -> list[SearchHit]:
        """Enumerate files under root matching the globs.

        Raises:
            SearchError: If ripgrep is missing, times out, or reports an error
        """
        argv = self.build_args(include_globs, exclude_globs)
        logger.debug(f"Running {shlex.join(argv)} in {root}")

        try:
            proc = subprocess.run(
                argv,
                cwd=root,
                text=True,
                errors="surrogateescape",
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise SearchError(f"Cannot run {self.binary} in {root}: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise SearchError(f"ripgrep timed out after {self.timeout}s in {root}") from e

        # Exit status 1 means nothing matched
        if proc.returncode == 1:
            return []
        if proc.returncode != 0:
            raise SearchError(f"ripgrep failed ({proc.returncode}) in {root}: {proc.stderr.strip()}")

        return [SearchHit(path=line) for line in proc.stdout.splitlines() if line]
