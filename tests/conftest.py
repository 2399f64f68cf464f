"""Test configuration and fixtures for tokentree."""

import pytest

from tokentree.path_rules.regex_rules import default_pending_rules


@pytest.fixture
def scan_root(tmp_path):
    """An empty directory whose own path doesn't trip the default pending patterns.

    Pending rules are matched against full paths, so a temporary directory created
    under a path containing e.g. "build" would turn every entry into a placeholder.
    """
    if default_pending_rules().matches(tmp_path.as_posix()):
        pytest.skip("temporary directory path matches a default pending pattern")
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def sample_project(scan_root):
    """Create a small project tree.

    project/
    ├── src/
    │   ├── main.py        (40 bytes -> 10 tokens)
    │   └── Utils.py       (9 bytes -> 2 tokens)
    ├── docs/
    │   └── guide.md       (8 bytes -> 2 tokens)
    ├── node_modules/
    │   └── pkg/index.js   (not scanned)
    ├── README.md          (13 bytes -> 3 tokens)
    └── app.log            (100 bytes -> 25 tokens)
    """
    (scan_root / "src").mkdir()
    (scan_root / "src" / "main.py").write_bytes(b"x" * 40)
    (scan_root / "src" / "Utils.py").write_bytes(b"x" * 9)
    (scan_root / "docs").mkdir()
    (scan_root / "docs" / "guide.md").write_bytes(b"x" * 8)
    (scan_root / "node_modules" / "pkg").mkdir(parents=True)
    (scan_root / "node_modules" / "pkg" / "index.js").write_bytes(b"x" * 4000)
    (scan_root / "README.md").write_bytes(b"x" * 13)
    (scan_root / "app.log").write_bytes(b"x" * 100)
    return scan_root
