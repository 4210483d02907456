from pathlib import Path

import pytest

GITIGNORE = """\
# build output
build/
*.log
!keep.log
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small working tree with a .gitignore at its root."""
    (tmp_path / ".gitignore").write_text(GITIGNORE, encoding="utf-8")
    for relative in (
        "build/out.o",
        "build/keep.log",
        "src/main.py",
        "src/debug.log",
        "src/keep.log",
        "README.md",
        ".git/HEAD",
    ):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
    return tmp_path
