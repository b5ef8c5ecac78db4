"""Workspace containment checks for file paths.

Works on path strings only: nothing here touches the filesystem, follows
symlinks or consults the host OS. The path convention is inferred from the
strings themselves so that Windows paths handed over by an editor are judged
correctly on any host:

- A string is Windows-like if it starts with a drive letter (``C:``) or
  contains a backslash. If either the path or the root is Windows-like, both
  are treated as Windows paths: ``/`` and ``\\`` are both separators and the
  comparison is case-insensitive.
- Otherwise both are POSIX paths compared case-sensitively.

``.`` segments are dropped and ``..`` pops the previous segment, except that a
drive token such as ``C:`` is never popped. A path is inside the workspace if
it equals the root or continues it after a separator, so ``/ws-extra`` is not
inside ``/ws``. Control characters, including NUL, are ordinary characters.
"""

import logging

logger = logging.getLogger(__name__)

__all__ = ["is_inside_workspace", "get_validated_path"]

_WINDOWS_SEP = "\\"
_POSIX_SEP = "/"


def _is_windows_path(path: str) -> bool:
    if len(path) >= 2 and path[1] == ":" and path[0].isascii() and path[0].isalpha():
        return True
    return _WINDOWS_SEP in path


def _is_drive(segment: str) -> bool:
    return len(segment) == 2 and segment.endswith(":")


def _resolve(path: str, windows: bool) -> str:
    """Collapse ``.``, ``..`` and repeated separators in a path string."""
    sep = _WINDOWS_SEP if windows else _POSIX_SEP
    if windows:
        path = path.replace(_POSIX_SEP, _WINDOWS_SEP)

    resolved: list[str] = []
    for segment in path.split(sep):
        if segment == "..":
            if resolved and not _is_drive(resolved[-1]):
                resolved.pop()
        elif segment in (".", ""):
            # Keep the leading empty segment that marks an absolute POSIX path
            if not resolved and not segment and not windows:
                resolved.append(segment)
        else:
            resolved.append(segment)
    return sep.join(resolved)


def is_inside_workspace(file_path: str, workspace_root: str) -> bool:
    """Check whether file_path lies at or under workspace_root.

    Args:
        file_path: Candidate path.
        workspace_root: Trusted root directory.

    Returns:
        True if the resolved path equals the resolved root or starts with it
        followed by a separator. False for empty inputs.

    Examples:
        >>> is_inside_workspace("/ws/./a/./b", "/ws")
        True
        >>> is_inside_workspace("/ws/../etc/passwd", "/ws")
        False
        >>> is_inside_workspace("C:\\\\Work\\\\a.md", "c:/work")
        True

    """
    if not file_path or not workspace_root:
        return False

    windows = _is_windows_path(file_path) or _is_windows_path(workspace_root)
    resolved_file = _resolve(file_path, windows)
    resolved_root = _resolve(workspace_root, windows)

    if windows:
        resolved_file = resolved_file.lower()
        resolved_root = resolved_root.lower()
        sep = _WINDOWS_SEP
    else:
        sep = _POSIX_SEP

    if resolved_file == resolved_root:
        return True
    return resolved_file.startswith(resolved_root + sep)


def get_validated_path(file_path: str, workspace_root: str) -> str | None:
    """Return file_path unchanged if it is inside workspace_root, else None."""
    if is_inside_workspace(file_path, workspace_root):
        return file_path
    logger.debug("Rejected path outside workspace: %r (root %r)", file_path, workspace_root)
    return None
