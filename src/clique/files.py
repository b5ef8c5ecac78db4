"""File-level glue around the pure parsers and updaters.

Locates status documents inside a workspace and reads/writes them, refusing
any path that resolves outside the workspace root (checked with
clique.workspace, on path strings only). Writes are atomic: the new text goes
to a temp file that then replaces the target.
"""

import logging
import os
from pathlib import Path

from pathspec import GitIgnoreSpec

from clique.core.config import CliqueConfig
from clique.core.exceptions import DocumentIOError, PathValidationError
from clique.workspace import is_inside_workspace

logger = logging.getLogger(__name__)

__all__ = [
    "find_workflow_status_file",
    "find_sprint_status_files",
    "read_document",
    "write_document",
]


def _guarded_path(path: Path, root: Path, config: CliqueConfig) -> Path:
    """Anchor a relative path at root and enforce workspace containment."""
    target = path if path.is_absolute() else root / path
    if config.enforce_workspace and not is_inside_workspace(str(target), str(root)):
        logger.warning("Refusing path outside workspace: %s (root %s)", target, root)
        raise PathValidationError(str(path), str(root))
    return target


def find_workflow_status_file(root: Path, config: CliqueConfig | None = None) -> Path | None:
    """Return the first existing workflow status candidate under root, or None."""
    config = config or CliqueConfig()
    for candidate in config.workflow_status_candidates:
        path = root / candidate
        if path.is_file():
            logger.debug("Found workflow status file: %s", path)
            return path
    return None


def _ignore_spec(root: Path, config: CliqueConfig) -> GitIgnoreSpec:
    """Compile excluded_dirs (and optionally the root .gitignore) into one spec."""
    patterns = list(config.excluded_dirs)
    if config.respect_gitignore:
        gitignore_path = root / ".gitignore"
        try:
            content = gitignore_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            content = ""
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read .gitignore at %s: %s", gitignore_path, e)
            content = ""
        patterns.extend(
            line.strip()
            for line in content.splitlines()
            if line.strip() and not line.strip().startswith("#")
        )
    return GitIgnoreSpec.from_lines(patterns)


def find_sprint_status_files(root: Path, config: CliqueConfig | None = None) -> list[Path]:
    """Find every sprint status document under root.

    Directories matching the ignore patterns are pruned and unreadable
    directories are skipped. Symlinked directories are not followed.

    Returns:
        Sorted list of matching file paths.

    """
    config = config or CliqueConfig()
    spec = _ignore_spec(root, config)
    results = []
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root)
        # pathspec expects forward slashes and a trailing slash for directories
        dirnames[:] = [
            name for name in dirnames if not spec.match_file((rel_dir / name).as_posix() + "/")
        ]
        if config.sprint_status_filename not in filenames:
            continue
        if spec.match_file((rel_dir / config.sprint_status_filename).as_posix()):
            continue
        results.append(Path(dirpath) / config.sprint_status_filename)
    return sorted(results)


def read_document(path: Path, root: Path, config: CliqueConfig | None = None) -> str:
    """Read a status document that must live inside root.

    Raises:
        PathValidationError: If path is outside root and enforcement is on.
        DocumentIOError: If the file cannot be read.

    """
    target = _guarded_path(path, root, config or CliqueConfig())
    try:
        return target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentIOError(f"Cannot read {target}: {e}") from e


def write_document(
    path: Path, content: str, root: Path, config: CliqueConfig | None = None
) -> None:
    """Atomically replace a status document that must live inside root.

    Raises:
        PathValidationError: If path is outside root and enforcement is on.
        DocumentIOError: If the file cannot be written.

    """
    target = _guarded_path(path, root, config or CliqueConfig())
    temp_path = target.with_name(f"{target.name}.tmp")
    try:
        # newline="" keeps the document's own line endings
        with open(temp_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        os.replace(temp_path, target)
    except OSError as e:
        if temp_path.exists():
            temp_path.unlink()
        raise DocumentIOError(f"Failed to write {target}: {e}") from e
    logger.info("Updated %s", target)
