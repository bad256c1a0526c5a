import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'muno' and tests/ importable for helpers
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from muno.core.config import clear_all_caches
from muno.core.stdlib_logging import reset_logging_for_tests
from helpers.workspace import write_config


@pytest.fixture(autouse=True)
def _isolated_muno_env(tmp_path_factory, monkeypatch):
    """Isolate every test from the user's settings and MUNO_* variables."""
    for key in list(os.environ):
        if key.startswith("MUNO_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("MUNO_CONFIG_HOME", str(tmp_path_factory.mktemp("muno-config-home")))
    clear_all_caches()
    yield
    clear_all_caches()
    reset_logging_for_tests()


@pytest.fixture
def nested_workspace(tmp_path: Path) -> Path:
    """Workspace "test" with /team declared at the root and /team/service nested.

    Layout::

        <root>/muno.yaml                       -> team
        <root>/repos/team/muno.yaml            -> service
    """
    root = tmp_path / "ws"
    write_config(root, "test", nodes=[{"name": "team", "url": "https://example.com/team"}])
    write_config(
        root / "repos" / "team",
        "team",
        nodes=[{"name": "service", "url": "https://example.com/service"}],
    )
    return root
