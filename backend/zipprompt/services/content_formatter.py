"""
Formatted document generation.
Walks the file tree and concatenates readable files into one Markdown document for LLM prompts.
"""

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from zipprompt.services.archive import ArchiveEntry
from zipprompt.services.policy import is_ignored_path, is_processable_extension, language_tag
from zipprompt.services.tree_builder import FileNode, FolderNode, TreeNode, iter_tree
from zipprompt.services.tree_renderer import render_ascii

logger = logging.getLogger(__name__)


DOCUMENT_TITLE = "# Project Structure and Contents"
TREE_HEADING = "## File Tree"
CONTENTS_HEADING = "## File Contents"


class OutcomeStatus(str, enum.Enum):
    """What happened to a file's content"""
    EMBEDDED = "embedded"
    SKIPPED = "skipped"  # policy: extension not allowed, symlink, or blank content
    FAILED = "failed"  # entry missing or unreadable


@dataclass(frozen=True)
class FileOutcome:
    path: str
    status: OutcomeStatus
    reason: Optional[str] = None
    lines: int = 0


@dataclass
class FormattedDocument:
    """Result of walking the tree: the document plus counters gathered on the way"""
    content: str
    lines_of_code: int = 0
    total_files: int = 0
    total_folders: int = 0
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def embedded(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.EMBEDDED]

    @property
    def failed(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status == OutcomeStatus.FAILED]


def format_file_block(path: str, content: str, extension: str) -> str:
    """One file section: header line, fenced block tagged with the language, blank line"""
    return f"### {path}\n```{language_tag(extension)}\n{content}\n```\n\n"


def count_lines(content: str) -> int:
    """Newline-delimited lines; a trailing newline ends the last line instead of starting one"""
    lines = content.split('\n')
    if len(lines) > 1 and lines[-1] == '':
        return len(lines) - 1
    return len(lines)


class _EntryLookup:
    """Finds the archive entry behind a tree node"""

    def __init__(self, entries: Sequence[ArchiveEntry], common_prefix: str):
        self.entries = entries
        self.common_prefix = common_prefix
        self.by_path: Dict[str, ArchiveEntry] = {}
        for entry in entries:
            self.by_path.setdefault(entry.path, entry)

    def find(self, node_path: str) -> Optional[ArchiveEntry]:
        entry = self.by_path.get(self.common_prefix + node_path)
        if entry is not None:
            return entry

        # Entries that did not share the detected prefix; never something the tree hides
        suffix = "/" + node_path
        return next(
            (
                e for e in self.entries
                if e.path.endswith(suffix) and not e.is_dir and not is_ignored_path(e.path)
            ),
            None,
        )


def _embed_file(node: FileNode, lookup: _EntryLookup) -> Tuple[FileOutcome, Optional[str]]:
    if not is_processable_extension(node.extension):
        return FileOutcome(node.path, OutcomeStatus.SKIPPED, "extension not processable"), None

    entry = lookup.find(node.path)
    if entry is None:
        logger.warning(f"No archive entry found for {node.path}")
        return FileOutcome(node.path, OutcomeStatus.FAILED, "entry not found"), None
    if entry.is_dir:
        return FileOutcome(node.path, OutcomeStatus.FAILED, "entry is a directory"), None
    if entry.is_symlink:
        return FileOutcome(node.path, OutcomeStatus.SKIPPED, "symbolic link"), None

    try:
        content = entry.read().decode('utf-8', errors='replace')
    except Exception as e:
        logger.warning(f"Error processing file {node.path}: {e}")
        return FileOutcome(node.path, OutcomeStatus.FAILED, str(e)), None

    if not content.strip():
        return FileOutcome(node.path, OutcomeStatus.SKIPPED, "empty content"), None

    lines = count_lines(content)
    return FileOutcome(node.path, OutcomeStatus.EMBEDDED, lines=lines), format_file_block(
        node.path, content, node.extension
    )


def format_document(
    tree: Sequence[TreeNode],
    entries: Sequence[ArchiveEntry],
    common_prefix: str = "",
) -> FormattedDocument:
    """
    Build the formatted document for a tree.

    Every file and folder is counted. A file's content is embedded only if
    its extension is processable and its text is not blank; files that cannot
    be located or read are recorded as failed and the walk continues.

    Args:
        tree: Root nodes returned by build_file_tree
        entries: The archive's entries, used to fetch file bytes
        common_prefix: The prefix that was stripped while building the tree

    Returns:
        FormattedDocument with content, counters, and per-file outcomes
    """
    lookup = _EntryLookup(entries, common_prefix)
    document = FormattedDocument(content="")
    blocks: List[str] = []

    for node in iter_tree(tree):
        if isinstance(node, FolderNode):
            document.total_folders += 1
            continue

        document.total_files += 1
        outcome, block = _embed_file(node, lookup)
        document.outcomes.append(outcome)
        if block is not None:
            blocks.append(block)
            document.lines_of_code += outcome.lines

    document.content = (
        f"{DOCUMENT_TITLE}\n\n"
        f"{TREE_HEADING}\n\n```\n{render_ascii(tree)}```\n\n"
        f"{CONTENTS_HEADING}\n\n"
        + "".join(blocks)
    )
    return document
