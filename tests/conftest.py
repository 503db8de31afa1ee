import pytest


def make_tree(base, files):
    """Create ``files`` (paths relative to ``base``), each with a little content."""
    for rel in files:
        path = base / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("# placeholder\n", encoding="utf-8")


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    # Walk relative roots so the pytest temp dir name never meets the exclusion tokens.
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def proj(workdir):
    root = workdir / "proj"
    root.mkdir()
    return root
