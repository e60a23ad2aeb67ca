"""
Path normalization for archive entries.

Archives created from a single project directory usually wrap every entry in
one top-level folder (``myproject/src/app.py``). That wrapper is detected once
per archive and stripped before the tree is built.
"""

from typing import Iterable, List


def detect_common_prefix(paths: Iterable[str]) -> str:
    """
    Return the top-level folder shared by every path, including its trailing
    slash, or '' when the paths do not all share one.

    Only the first path proposes a candidate: everything up to and including
    its first '/'. A path that starts with '/' proposes nothing.

    Args:
        paths: Raw archive entry paths, in archive order

    Returns:
        The prefix to strip (e.g. "proj/"), or ""
    """
    paths = list(paths)
    if not paths:
        return ""

    first_slash = paths[0].find('/')
    if first_slash <= 0:
        return ""

    candidate = paths[0][:first_slash + 1]
    if all(path.startswith(candidate) for path in paths):
        return candidate
    return ""


def strip_prefix(path: str, prefix: str) -> str:
    if prefix and path.startswith(prefix):
        return path[len(prefix):]
    return path


def split_segments(path: str) -> List[str]:
    """Split on '/' dropping empty segments (leading, trailing or doubled slashes)"""
    return [part for part in path.split('/') if part]
