"""
ASCII rendering of the file tree for the formatted document.
"""

from typing import Sequence

from zipprompt.services.tree_builder import FolderNode, TreeNode

FOLDER_ICON = "📁 "
FILE_ICON = "📄 "


def render_ascii(nodes: Sequence[TreeNode], prefix: str = "") -> str:
    """
    Render nodes as a box-drawn directory listing, one line per node.

        ├── 📁 src
        │   └── 📄 app.py
        └── 📄 README.md
    """
    result = ""

    for index, node in enumerate(nodes):
        is_last = index == len(nodes) - 1
        connector = "└── " if is_last else "├── "
        icon = FOLDER_ICON if isinstance(node, FolderNode) else FILE_ICON

        result += f"{prefix}{connector}{icon}{node.name}\n"

        if isinstance(node, FolderNode):
            result += render_ascii(node.children, prefix + ("    " if is_last else "│   "))

    return result
