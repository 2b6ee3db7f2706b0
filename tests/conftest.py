"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pygit2
import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local lintemit package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of lintemit modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("lintemit"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config at an empty directory and drop LINTEMIT__ env vars."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for key in list(os.environ):
        if key.upper().startswith("LINTEMIT__"):
            monkeypatch.delenv(key)
    return config_home


def _commit_all(repo: pygit2.Repository, message: str) -> pygit2.Oid:
    """Stage everything in the working tree and commit it on HEAD."""
    repo.index.add_all()
    repo.index.write()
    tree = repo.index.write_tree()
    sig = pygit2.Signature("Test User", "test@example.com")
    parents = [] if repo.head_is_unborn else [repo.head.target]
    return repo.create_commit("HEAD", sig, sig, message, tree, parents)


@pytest.fixture
def temp_repo(tmp_path: Path) -> Generator[pygit2.Repository, None, None]:
    """Create a temporary git repository with initial commit."""
    repo_path = tmp_path / "repo"
    repo_path.mkdir()

    repo = pygit2.init_repository(str(repo_path), initial_head="main")

    # Configure user
    repo.config["user.name"] = "Test User"
    repo.config["user.email"] = "test@example.com"

    (repo_path / "README.md").write_text("# Test Repo\n")
    _commit_all(repo, "Initial commit")

    yield repo


@pytest.fixture
def repo_root(temp_repo: pygit2.Repository) -> Path:
    """Resolved working tree root of temp_repo."""
    return Path(temp_repo.workdir).resolve()


@pytest.fixture
def commit(temp_repo: pygit2.Repository) -> Callable[[str], pygit2.Oid]:
    """Return a function that stages the working tree and commits it."""

    def _commit(message: str = "Change") -> pygit2.Oid:
        return _commit_all(temp_repo, message)

    return _commit
