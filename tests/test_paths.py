"""Tests for PathResolver."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from bitx_config import CONFIG_DIR_NAME
from bitx_config import PathResolver
from bitx_config import Scope


class TestPathResolver:
    """Test PathResolver class."""

    @pytest.fixture
    def resolver(self):
        """Create PathResolver with a fixed home directory."""
        return PathResolver(home=lambda: Path("/mock/home"))

    def test_config_dir_name(self):
        """Test the reserved folder name."""
        assert CONFIG_DIR_NAME == ".bitx"

    def test_global_directory(self, resolver):
        """Test global directory is home joined with the folder name."""
        assert resolver.global_directory() == Path("/mock/home") / ".bitx"

    def test_global_directory_follows_home(self):
        """Test global directory tracks the injected home accessor."""
        resolver = PathResolver(home=lambda: Path("/different/home"))
        assert resolver.global_directory() == Path("/different/home/.bitx")

    def test_home_may_return_string(self):
        """Test a home accessor returning a string is accepted."""
        resolver = PathResolver(home=lambda: "/string/home")
        assert resolver.global_directory() == Path("/string/home/.bitx")

    def test_default_home(self):
        """Test the default home accessor is Path.home."""
        assert PathResolver().global_directory() == Path.home() / ".bitx"

    def test_project_directory(self, resolver):
        """Test project directory is root joined with the folder name."""
        assert resolver.project_directory("/custom/project/path") == Path("/custom/project/path/.bitx")

    def test_project_directory_not_checked_for_existence(self, resolver):
        """Test project directory is computed for roots that do not exist."""
        with TemporaryDirectory() as tmpdir:
            missing = Path(tmpdir) / "nowhere"
            assert resolver.project_directory(missing) == missing / ".bitx"
            assert not missing.exists()

    def test_ordered_directories(self, resolver):
        """Test ordered directories are global then project."""
        assert resolver.ordered_directories("/project/path") == [
            Path("/mock/home/.bitx"),
            Path("/project/path/.bitx"),
        ]

    def test_custom_dir_name(self):
        """Test a custom folder name is used at both scopes."""
        resolver = PathResolver(home=lambda: Path("/h"), dir_name=".agent")
        assert resolver.ordered_directories("/p") == [Path("/h/.agent"), Path("/p/.agent")]


class TestScopeOf:
    """Test scope classification by exact path comparison."""

    def test_global(self):
        """Test the home .bitx directory is GLOBAL."""
        resolver = PathResolver(home=lambda: Path("/Users/test"))
        assert resolver.scope_of("/Users/test/.bitx", "/Users/test/project") == Scope.GLOBAL

    def test_project(self):
        """Test the root .bitx directory is PROJECT."""
        resolver = PathResolver(home=lambda: Path("/Users/test"))
        assert resolver.scope_of("/Users/test/project/.bitx", "/Users/test/project") == Scope.PROJECT

    def test_subfolder(self):
        """Test a nested .bitx directory is SUBFOLDER."""
        resolver = PathResolver(home=lambda: Path("/Users/test"))
        assert resolver.scope_of("/Users/test/project/pkg/.bitx", "/Users/test/project") == Scope.SUBFOLDER

    def test_home_containing_dir_name(self):
        """Test a home path containing ".bitx" does not make project directories global."""
        resolver = PathResolver(home=lambda: Path("/Users/john.bitx.smith"))
        assert resolver.scope_of("/Users/john.bitx.smith/.bitx", "/projects/app") == Scope.GLOBAL
        assert resolver.scope_of("/projects/app/.bitx", "/projects/app") == Scope.PROJECT

    def test_global_wins_when_root_is_home(self):
        """Test GLOBAL is reported when the root is the home directory."""
        resolver = PathResolver(home=lambda: Path("/home/user"))
        assert resolver.scope_of("/home/user/.bitx", "/home/user") == Scope.GLOBAL

    def test_unrelated_directory_rejected(self):
        """Test a directory outside home and root raises ValueError."""
        resolver = PathResolver(home=lambda: Path("/home/user"))
        with pytest.raises(ValueError):
            resolver.scope_of("/elsewhere/.bitx", "/projects/app")


class TestScopeOrdering:
    """Test Scope ordering."""

    def test_rank_order(self):
        """Test GLOBAL precedes PROJECT precedes SUBFOLDER."""
        assert Scope.GLOBAL.rank < Scope.PROJECT.rank < Scope.SUBFOLDER.rank
