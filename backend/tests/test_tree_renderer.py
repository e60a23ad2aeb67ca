"""
Tests for the ASCII tree rendering
"""

from conftest import make_entry
from zipprompt.services.tree_builder import build_file_tree
from zipprompt.services.tree_renderer import render_ascii


class TestRenderAscii:
    """Box-drawn listing of the tree"""

    def test_nested_layout(self):
        tree = build_file_tree([
            make_entry("proj/README.md"),
            make_entry("proj/src/app.py"),
            make_entry("proj/src/lib/util.py"),
            make_entry("proj/tests/test_app.py"),
        ])
        assert render_ascii(tree) == (
            "├── 📄 README.md\n"
            "├── 📁 src\n"
            "│   ├── 📄 app.py\n"
            "│   └── 📁 lib\n"
            "│       └── 📄 util.py\n"
            "└── 📁 tests\n"
            "    └── 📄 test_app.py\n"
        )

    def test_single_node(self):
        tree = build_file_tree([make_entry("README")])
        assert render_ascii(tree) == "└── 📄 README\n"

    def test_empty_tree(self):
        assert render_ascii([]) == ""

    def test_prefix_is_applied(self):
        tree = build_file_tree([make_entry("a.py")])
        assert render_ascii(tree, prefix=">>") == ">>└── 📄 a.py\n"

    def test_rendering_does_not_change_tree(self):
        tree = build_file_tree([make_entry("p/a/b.py"), make_entry("p/c.py")])
        before = list(tree)
        render_ascii(tree)
        assert tree == before
