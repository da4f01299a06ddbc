"""Write-protection classification for agent configuration files.

A fixed set of glob patterns names the files an agent must not modify without
explicit approval. This module only classifies paths; blocking or prompting
is up to the caller.

Pattern semantics:
- Patterns without a leading "/" match at any depth ("nested/.rooignore")
- "*" matches within a single path segment
- "**" matches across segments; in trailing position it matches the contents
  of a directory, not the directory itself
- Matching is case-sensitive
"""

import logging
import posixpath
import re
from collections.abc import Iterable
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .models import ProtectionRecord

logger = logging.getLogger(__name__)

SHIELD_SYMBOL = "\U0001F6E1"

PROTECTED_PATTERNS = [
    ".rooignore",
    ".roomodes",
    ".roorules*",
    ".clinerules*",
    ".bitx/**",
    ".vscode/**",
    "*.code-workspace",
    ".rooprotected",
    "AGENTS.md",
    "AGENT.md",
]

PROTECTION_MESSAGE = "This is a Roo configuration file and requires approval for modifications"

_DRIVE = re.compile(r"^[A-Za-z]:/")


class SegmentKind(Enum):
    """Kind of a compiled glob segment."""

    LITERAL = "literal"
    WILDCARD = "wildcard"
    GLOBSTAR = "globstar"


@dataclass(frozen=True)
class Segment:
    """One "/"-separated piece of a compiled glob."""

    kind: SegmentKind
    text: str
    regex: re.Pattern[str] | None = None

    def matches(self, name: str) -> bool:
        """Check whether one path segment matches.

        Args:
            name: A single path segment (no separators)

        Returns:
            True if the segment matches; GLOBSTAR matches any segment
        """
        if self.kind is SegmentKind.LITERAL:
            return name == self.text
        if self.kind is SegmentKind.WILDCARD:
            return self.regex.fullmatch(name) is not None
        return True


@dataclass(frozen=True)
class CompiledPattern:
    """A glob pattern compiled to segments."""

    source: str
    segments: tuple[Segment, ...]
    anchored: bool = False

    def matches(self, parts: Sequence[str]) -> bool:
        """Match normalized path segments against this pattern.

        Args:
            parts: Root-relative path split on "/"

        Returns:
            True if the pattern matches (anywhere, unless anchored)
        """
        if self.anchored:
            return _match_segments(self.segments, parts)
        return any(_match_segments(self.segments, parts[start:]) for start in range(len(parts)))


def compile_segment(text: str) -> Segment:
    """Compile one "/"-free piece of a glob.

    Args:
        text: Segment text such as "**", ".roorules*" or "AGENTS.md"

    Returns:
        GLOBSTAR, WILDCARD (with its regex) or LITERAL segment
    """
    if text == "**":
        return Segment(SegmentKind.GLOBSTAR, text)
    if "*" in text:
        regex = re.compile("[^/]*".join(re.escape(piece) for piece in text.split("*")))
        return Segment(SegmentKind.WILDCARD, text, regex)
    return Segment(SegmentKind.LITERAL, text)


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile a glob such as ".bitx/**" or "*.code-workspace".

    A leading "/" anchors the pattern to the workspace root.
    """
    anchored = pattern.startswith("/")
    pieces = [piece for piece in pattern.strip("/").split("/") if piece]
    return CompiledPattern(pattern, tuple(compile_segment(piece) for piece in pieces), anchored)


def _match_segments(segments: Sequence[Segment], parts: Sequence[str]) -> bool:
    """Match all of parts against all of segments."""
    if not segments:
        return not parts

    head, rest = segments[0], segments[1:]
    if head.kind is SegmentKind.GLOBSTAR:
        # Trailing ** needs at least one segment to match
        minimum = 0 if rest else 1
        return any(_match_segments(rest, parts[skip:]) for skip in range(minimum, len(parts) + 1))

    return bool(parts) and head.matches(parts[0]) and _match_segments(rest, parts[1:])


_COMPILED_PATTERNS = tuple(compile_pattern(pattern) for pattern in PROTECTED_PATTERNS)


def _to_posix(path: str) -> str:
    """Convert backslash separators to forward slashes."""
    return path.replace("\\", "/")


def _is_absolute(path: str) -> bool:
    """Check for a POSIX root or a Windows drive prefix."""
    return path.startswith("/") or _DRIVE.match(path) is not None


class ProtectionMatcher:
    """Classifies paths as write-protected agent configuration files.

    Relative paths are taken relative to the workspace root; absolute paths
    under the root are rewritten to root-relative form first. Paths outside
    the workspace are never protected.

    Args:
        workspace_root: Absolute path of the workspace
    """

    def __init__(self, workspace_root: str | Path):
        self.workspace_root = Path(workspace_root)
        self._root = posixpath.normpath(_to_posix(str(workspace_root)))

    def relative_path(self, path: str) -> str | None:
        """Normalize path to a root-relative POSIX path.

        Returns:
            Normalized relative path, or None for empty paths and paths that
            fall outside the workspace
        """
        if not isinstance(path, str) or not path.strip():
            return None

        candidate = _to_posix(path)
        if _is_absolute(candidate):
            candidate = posixpath.normpath(candidate)
            if candidate == self._root:
                return None
            prefix = self._root.rstrip("/") + "/"
            if not candidate.startswith(prefix):
                return None
            candidate = candidate[len(prefix):]

        candidate = posixpath.normpath(candidate)
        if candidate == "." or candidate == ".." or candidate.startswith("../"):
            return None
        return candidate

    def matching_pattern(self, path: str) -> str | None:
        """Get the first protected pattern that path matches, if any.

        Args:
            path: Relative or absolute path

        Returns:
            Pattern string, or None if the path is not protected
        """
        relative = self.relative_path(path)
        if relative is None:
            return None

        parts = relative.split("/")
        for pattern in _COMPILED_PATTERNS:
            if pattern.matches(parts):
                return pattern.source
        return None

    def is_protected(self, path: str) -> bool:
        """Check whether a file is write-protected.

        Args:
            path: Relative or absolute path, "/" or "\\" separated

        Returns:
            True if any protected pattern matches
        """
        pattern = self.matching_pattern(path)
        if pattern is not None:
            logger.debug(f"{path} is write-protected (matches {pattern})")
            return True
        return False

    def get_protected_files(self, paths: Iterable[str]) -> set[str]:
        """Get the protected subset of paths.

        Args:
            paths: Candidate paths

        Returns:
            Set of the original (non-normalized) strings that are protected
        """
        return {path for path in paths if self.is_protected(path)}

    def annotate_paths_with_protection(self, paths: Iterable[str]) -> list[ProtectionRecord]:
        """Annotate each path with its protection status.

        Args:
            paths: Candidate paths

        Returns:
            One ProtectionRecord per input path, in input order
        """
        return [ProtectionRecord(path=path, is_protected=self.is_protected(path)) for path in paths]

    def get_protection_message(self) -> str:
        """Get the message shown when approval is requested for a protected file."""
        return PROTECTION_MESSAGE

    def get_instructions(self) -> str:
        """Get instructions describing the protected files for the agent prompt."""
        patterns = ", ".join(PROTECTED_PATTERNS)
        return (
            "# Protected Files\n\n"
            "(The following Roo configuration file patterns are write-protected and always require "
            "approval for modifications, regardless of autoapproval settings. When using list_files, "
            f"you'll notice a {SHIELD_SYMBOL} next to files that are write-protected.)\n\n"
            f"Protected patterns: {patterns}"
        )

    @staticmethod
    def get_protected_patterns() -> list[str]:
        """Get the fixed list of protected patterns."""
        return list(PROTECTED_PATTERNS)
