from __future__ import annotations

import base64
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from .io import read_bytes, read_text
from .paths import resolve_reference_path

COMPONENT_RE = re.compile(r"\[(/?[\w/.\-\s]+\.comp)\]")
SCRIPT_RE = re.compile(r'<script\s+src="(.+?)"></script>')
IMAGE_RE = re.compile(r'<img\s+[^>]*src="([^"]+\.(png|jpe?g|gif|svg))"[^>]*>', re.IGNORECASE)

_PASSTHROUGH_PREFIXES = ("http://", "https://", "data:")


@dataclass(frozen=True)
class ReferenceEvent:
    kind: str
    reference: str
    resolved_path: Path | None
    status: str


def _record(
    events: list[ReferenceEvent] | None,
    kind: str,
    reference: str,
    resolved_path: Path | None,
    status: str,
) -> None:
    if events is not None:
        events.append(ReferenceEvent(kind, reference, resolved_path, status))


def image_mime_type(src: str) -> str:
    ext = Path(src).suffix.lstrip(".").lower()
    if ext == "svg":
        return "image/svg+xml"
    return f"image/{ext}"


@dataclass
class _Expansion:
    """One component body being expanded; the root document has no path."""

    text: str
    base_dir: Path
    path: Path | None
    matches: Iterator[re.Match[str]]
    parts: list[str] = field(default_factory=list)
    pos: int = 0


def _start_expansion(text: str, base_dir: str | Path, path: Path | None) -> _Expansion:
    return _Expansion(text, Path(base_dir), path, COMPONENT_RE.finditer(text))


def inline_components(
    text: str,
    base_dir: str | Path,
    project_root: str | Path,
    visited: set[Path] | None = None,
    *,
    events: list[ReferenceEvent] | None = None,
) -> str:
    """Expand every ``[path.comp]`` reference in ``text``.

    ``visited`` holds the components currently being expanded on this
    branch. A component is added before its body is expanded and removed
    afterwards, so the same file may appear again on a sibling branch but
    never inside itself.

    Expansion runs on an explicit stack of ``_Expansion`` frames, so
    nesting depth is bounded by memory rather than the interpreter
    recursion limit.
    """

    if visited is None:
        visited = set()

    stack = [_start_expansion(text, base_dir, None)]
    try:
        while True:
            frame = stack[-1]
            match = next(frame.matches, None)

            if match is None:
                frame.parts.append(frame.text[frame.pos:])
                content = "".join(frame.parts)
                stack.pop()
                if frame.path is None:
                    return content

                visited.discard(frame.path)
                content = inline_scripts(content, frame.base_dir, project_root, events=events)
                content = inline_images(content, frame.base_dir, project_root, events=events)
                stack[-1].parts.append(content)
                continue

            frame.parts.append(frame.text[frame.pos:match.start()])
            frame.pos = match.end()

            ref = match.group(1).strip()
            full_path = resolve_reference_path(ref, frame.base_dir, project_root)

            if not full_path.is_file():
                _record(events, "component", ref, full_path, "missing")
                frame.parts.append(f"<!-- Missing component: {ref} (resolved to: {full_path}) -->")
                continue

            if full_path in visited:
                _record(events, "component", ref, full_path, "circular")
                frame.parts.append(f"<!-- Circular reference prevented: {ref} -->")
                continue

            body = read_text(full_path, errors="replace")
            _record(events, "component", ref, full_path, "inlined")
            visited.add(full_path)
            stack.append(_start_expansion(body, full_path.parent, full_path))
    finally:
        for frame in stack:
            if frame.path is not None:
                visited.discard(frame.path)


def inline_scripts(
    text: str,
    base_dir: str | Path,
    project_root: str | Path,
    *,
    events: list[ReferenceEvent] | None = None,
) -> str:
    def _replace(match: re.Match[str]) -> str:
        src = match.group(1).strip()
        full_path = resolve_reference_path(src, base_dir, project_root)

        if not full_path.is_file():
            _record(events, "script", src, full_path, "missing")
            return f"<!-- Missing script: {src} -->"

        _record(events, "script", src, full_path, "inlined")
        return f"<script>\n{read_text(full_path, errors='replace')}\n</script>"

    return SCRIPT_RE.sub(_replace, text)


def inline_images(
    text: str,
    base_dir: str | Path,
    project_root: str | Path,
    *,
    events: list[ReferenceEvent] | None = None,
) -> str:
    """Rewrite local ``<img src>`` values to base64 data URIs.

    Only the attribute value changes; the rest of the element is kept
    byte for byte. Remote and already-embedded sources are left alone.
    """

    def _replace(match: re.Match[str]) -> str:
        src = match.group(1).strip()

        if src.lower().startswith(_PASSTHROUGH_PREFIXES):
            _record(events, "image", src, None, "skipped")
            return match.group(0)

        full_path = resolve_reference_path(src, base_dir, project_root)
        if not full_path.is_file():
            _record(events, "image", src, full_path, "missing")
            return f"<!-- Missing image: {src} -->"

        _record(events, "image", src, full_path, "inlined")
        payload = base64.b64encode(read_bytes(full_path)).decode("ascii")
        data_uri = f"data:{image_mime_type(src)};base64,{payload}"

        element = match.group(0)
        start = match.start(1) - match.start(0)
        end = match.end(1) - match.start(0)
        return element[:start] + data_uri + element[end:]

    return IMAGE_RE.sub(_replace, text)
