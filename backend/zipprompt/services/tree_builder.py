"""
Builds the file/folder tree shown to callers from a flat list of archive entries.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union
import logging

from zipprompt.services.archive import ArchiveEntry
from zipprompt.services.paths import detect_common_prefix, split_segments, strip_prefix
from zipprompt.services.policy import get_file_extension, is_ignored_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileNode:
    """A leaf of the tree"""
    name: str
    path: str
    size: int
    extension: str
    type: str = field(default="file", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "type": self.type,
            "size": self.size,
            "extension": self.extension,
        }


@dataclass(frozen=True)
class FolderNode:
    """A folder with at least one surviving child"""
    name: str
    path: str
    children: Tuple["TreeNode", ...]
    type: str = field(default="folder", init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "type": self.type,
            "children": [child.to_dict() for child in self.children],
        }


TreeNode = Union[FileNode, FolderNode]


def build_file_tree(
    entries: Sequence[ArchiveEntry],
    common_prefix: Optional[str] = None,
) -> List[TreeNode]:
    """
    Convert flat archive entries into a nested, ordered tree.

    Entries with an ignored path segment are dropped, the rest are sorted by
    path and inserted segment by segment. Sibling order is the order in which
    names are first seen during that sorted walk. When two entries disagree on
    whether a name is a file or a folder, the first one wins and the later
    entry is dropped. Folders that end up with no children are omitted.

    Args:
        entries: Archive entries in archive order
        common_prefix: Wrapper folder to strip; detected from all entries when None

    Returns:
        Root-level nodes of the tree
    """
    if common_prefix is None:
        common_prefix = detect_common_prefix(entry.path for entry in entries)

    valid_entries = sorted(
        (entry for entry in entries if not is_ignored_path(entry.path)),
        key=lambda entry: entry.path,
    )

    root: Dict[str, Dict[str, Any]] = {}

    for entry in valid_entries:
        parts = split_segments(strip_prefix(entry.path, common_prefix))
        if not parts:
            continue

        current = root
        for index, part in enumerate(parts):
            is_last = index == len(parts) - 1
            if part not in current:
                path = '/'.join(parts[:index + 1])
                if is_last and not entry.is_dir:
                    current[part] = {
                        'type': 'file',
                        'path': path,
                        'size': entry.size,
                        'extension': get_file_extension(part),
                    }
                else:
                    current[part] = {'type': 'folder', 'path': path, 'children': {}}

            if is_last:
                break
            node = current[part]
            if node['type'] == 'file':
                logger.debug(f"Dropping {entry.path}: '{node['path']}' is already a file")
                break
            current = node['children']

    return _finalize(root)


def _finalize(level: Dict[str, Dict[str, Any]]) -> List[TreeNode]:
    nodes: List[TreeNode] = []
    for name, draft in level.items():
        if draft['type'] == 'file':
            nodes.append(FileNode(
                name=name,
                path=draft['path'],
                size=draft['size'],
                extension=draft['extension'],
            ))
            continue

        children = _finalize(draft['children'])
        if children:
            nodes.append(FolderNode(name=name, path=draft['path'], children=tuple(children)))
    return nodes


def iter_tree(nodes: Sequence[TreeNode]) -> Iterator[TreeNode]:
    """Depth-first, pre-order walk in child order, using an explicit stack"""
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, FolderNode):
            stack.extend(reversed(node.children))


def tree_to_dicts(nodes: Sequence[TreeNode]) -> List[Dict[str, Any]]:
    """JSON-serializable form: {name, path, type, children?, size?, extension?}"""
    return [node.to_dict() for node in nodes]
