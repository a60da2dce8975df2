from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .inline import ReferenceEvent, inline_components, inline_images, inline_scripts
from .io import read_text, write_text
from .manifest import write_build_manifest


@dataclass(frozen=True)
class CompileResult:
    input_path: Path
    output_path: Path
    project_root: Path
    events: list[ReferenceEvent] = field(default_factory=list)

    @property
    def missing(self) -> list[ReferenceEvent]:
        return [e for e in self.events if e.status == "missing"]

    @property
    def circular(self) -> list[ReferenceEvent]:
        return [e for e in self.events if e.status == "circular"]


def compile_hybrid_html(
    input_file: str | Path,
    output_file: str | Path,
    *,
    manifest_path: str | Path | None = None,
) -> CompileResult:
    """Compile one hybrid HTML document into plain HTML.

    The input file's directory is the project root for the whole run:
    ``/x`` references resolve against it no matter how deeply they are
    nested. Read and write errors propagate to the caller.
    """

    input_path = Path(os.path.abspath(input_file))
    project_root = input_path.parent
    base_dir = project_root

    events: list[ReferenceEvent] = []
    html = read_text(input_path)

    html = inline_components(html, base_dir, project_root, events=events)
    # Leftovers written directly in the main document.
    html = inline_scripts(html, base_dir, project_root, events=events)
    html = inline_images(html, base_dir, project_root, events=events)

    output_path = Path(output_file)
    write_text(output_path, html)

    result = CompileResult(
        input_path=input_path,
        output_path=output_path,
        project_root=project_root,
        events=events,
    )

    if manifest_path is not None:
        write_build_manifest(result, manifest_path)

    return result
