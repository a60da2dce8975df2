from __future__ import annotations

import os
from pathlib import Path

_SEPARATORS = {"/", os.sep}


def resolve_reference_path(raw: str, base_dir: str | Path, project_root: str | Path) -> Path:
    """Map a reference string found in a document to an absolute path.

    Rules, first match wins:
    1) a leading separator makes the path project-root relative
    2) a platform-absolute path (``C:\\x``, ``\\\\share``) is returned as-is
    3) anything else is relative to ``base_dir``

    The filesystem is never touched; callers check existence.
    """

    normalized = os.path.normpath(raw)

    if raw[:1] in _SEPARATORS:
        remainder = normalized.lstrip("".join(_SEPARATORS))
        return Path(os.path.normpath(os.path.join(project_root, remainder)))

    if os.path.isabs(normalized):
        return Path(normalized)

    return Path(os.path.normpath(os.path.join(base_dir, normalized)))


def safe_relpath_under(root: str | Path, path: str | Path) -> str:
    """Return posix relpath if `path` is under `root`, else raise ValueError."""

    root_path = Path(os.path.normpath(root))
    target_path = Path(os.path.normpath(path))
    try:
        rel = target_path.relative_to(root_path)
    except ValueError as exc:
        raise ValueError(f"Path is not under root: {target_path} not under {root_path}") from exc
    return rel.as_posix()
