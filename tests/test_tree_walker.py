import os

import pytest

from vscode_pysuite.config_manager import ConfigManager
from vscode_pysuite import tree_walker
from vscode_pysuite.tree_walker import SourceFileDetector, SubstringExclusion, TreeWalker

from conftest import make_tree


def _walker(max_depth=None):
    section = ConfigManager().config.tree_walker
    return TreeWalker(
        SubstringExclusion(section.exclude_folders),
        SourceFileDetector(section.source_marker),
        max_depth,
    )


def test_substring_exclusion_matches_anywhere_in_path():
    is_excluded = SubstringExclusion(["out", "node_modules"])
    assert is_excluded("proj/out")
    assert is_excluded("proj/web/node_modules/pkg")
    # known quirk: substring, not segment, matching
    assert is_excluded("proj/outline")
    assert not is_excluded("proj/src")
    assert not is_excluded("proj/OUT")


def test_source_file_detector(proj):
    make_tree(proj, ["pkg/mod.py", "docs/README.md"])
    detector = SourceFileDetector(".py")
    assert detector(os.path.join("proj", "pkg"))
    assert not detector(os.path.join("proj", "docs"))
    assert not detector(os.path.join("proj", "missing"))
    assert not detector(os.path.join("proj", "pkg", "mod.py"))


def test_scenario_src_build_lib(proj):
    make_tree(proj, ["src/a.py", "build/b.py", "lib/README.md"])
    assert list(_walker().walk("proj")) == ["proj/src"]


def test_empty_root_yields_nothing(proj):
    assert list(_walker().walk("proj")) == []


def test_unreadable_root_is_a_noop(workdir):
    assert list(_walker().walk("does-not-exist")) == []


def test_descends_into_folders_without_direct_sources(proj):
    make_tree(proj, ["app/core/engine.py", "app/core/deep/util.py", "app/notes.txt"])
    found = list(_walker().walk("proj"))
    assert sorted(found) == ["proj/app/core", "proj/app/core/deep"]
    assert found.index("proj/app/core") < found.index("proj/app/core/deep")


def test_excluded_subtrees_are_pruned(proj):
    make_tree(
        proj,
        [
            "src/a.py",
            "src/__pycache__/a.cpython-312.pyc",
            "web/node_modules/tool/setup.py",
            "logs/run/trace.py",
            "outline/plan.py",
        ],
    )
    found = list(_walker().walk("proj"))
    assert found == ["proj/src"]
    tokens = ConfigManager().config.tree_walker.exclude_folders
    assert not any(token in path for path in found for token in tokens)


def test_qualifying_iff_direct_source_entry(proj):
    make_tree(
        proj,
        [
            "a/x.py",
            "a/b/readme.md",
            "a/b/c/y.py",
            "d/e/z.pyi",
            "f/data.json",
        ],
    )
    found = set(_walker().walk("proj"))
    assert found == {"proj/a", "proj/a/b/c", "proj/d/e"}


def test_preorder_parent_before_children(proj):
    make_tree(proj, ["p/one.py", "p/q/two.py", "p/q/r/three.py", "s/four.py"])
    found = list(_walker().walk("proj"))
    assert found.index("proj/p") < found.index("proj/p/q") < found.index("proj/p/q/r")
    assert len(found) == 4


def test_trailing_separator_root(proj):
    make_tree(proj, ["src/a.py"])
    assert list(_walker().walk("proj/")) == ["proj/src"]


def test_symlink_cycle_terminates(proj, caplog):
    make_tree(proj, ["a/m.py"])
    try:
        os.symlink(os.path.abspath(proj / "a"), proj / "a" / "loop")
        os.symlink(os.path.abspath(proj), proj / "a" / "up")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")

    assert list(_walker().walk("proj")) == ["proj/a"]
    assert "cycle" in caplog.text


def test_symlink_to_sibling_is_followed(proj):
    make_tree(proj, ["lib/m.py"])
    try:
        os.symlink(os.path.abspath(proj / "lib"), proj / "alias")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported here")

    assert sorted(_walker().walk("proj")) == ["proj/alias", "proj/lib"]


def test_max_depth_guard(proj, caplog):
    make_tree(proj, ["a/m.py", "a/b/n.py", "a/b/c/o.py"])
    assert list(_walker(max_depth=1).walk("proj")) == ["proj/a"]
    pruned = [r.getMessage() for r in caplog.records if "Depth limit" in r.getMessage()]
    assert pruned == ["Depth limit 1 reached; not visiting 'proj/a/b'"]
    assert all(r.levelname == "WARNING" for r in caplog.records if "Depth limit" in r.getMessage())
    caplog.clear()
    assert sorted(_walker(max_depth=2).walk("proj")) == ["proj/a", "proj/a/b"]
    assert [r.getMessage() for r in caplog.records] == [
        "Depth limit 2 reached; not visiting 'proj/a/b/c'"
    ]


def test_walk_is_lazy(proj):
    make_tree(proj, ["a/m.py"])
    walk = _walker().walk("proj")
    assert next(walk) == "proj/a"
    with pytest.raises(StopIteration):
        next(walk)


def test_custom_predicates_are_used(proj):
    make_tree(proj, ["outline/plan.py", "src/a.py"])
    walker = TreeWalker(lambda path: False, SourceFileDetector(".py"))
    assert sorted(walker.walk("proj")) == ["proj/outline", "proj/src"]


def test_from_config_section(proj):
    make_tree(proj, ["web/app.js", "py/a.py"])
    cm = ConfigManager()
    cm.config.tree_walker.source_marker = ".js"
    assert list(TreeWalker.from_config(cm.config.tree_walker).walk("proj")) == ["proj/web"]


def test_unreadable_subdirectory_is_skipped(proj, monkeypatch):
    make_tree(proj, ["a/x.py", "locked/y.py", "locked/sub/z.py", "m/n/w.py"])
    real_scandir = os.scandir
    attempts = []

    def scandir(path="."):
        if os.fspath(path) == os.path.join("proj", "locked"):
            attempts.append(path)
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    monkeypatch.setattr(tree_walker.os, "scandir", scandir)

    assert sorted(_walker().walk("proj")) == ["proj/a", "proj/m/n"]
    # content check and descent both hit the locked folder
    assert len(attempts) == 2
