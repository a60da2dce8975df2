from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

import jsonschema
from jsonschema import Draft202012Validator

from . import __version__
from .io import read_json_file, sha256_file, write_json_stable
from .paths import safe_relpath_under

if TYPE_CHECKING:
    from .compiler import CompileResult

SCHEMA_VERSION = "v1"


def _default_schema_path() -> Path:
    return Path(__file__).resolve().parent / "schemas" / "build_manifest_v1.schema.json"


def load_schema(schema_path: str | Path | None = None) -> dict[str, Any]:
    path = Path(schema_path) if schema_path is not None else _default_schema_path()
    return read_json_file(path)


def _display_path(project_root: Path, path: Path | None) -> str | None:
    if path is None:
        return None
    try:
        return safe_relpath_under(project_root, path)
    except ValueError:
        return str(path)


def build_manifest_payload(result: CompileResult) -> dict[str, Any]:
    references = [
        {
            "kind": e.kind,
            "reference": e.reference,
            "status": e.status,
            "resolved_path": _display_path(result.project_root, e.resolved_path),
            "sha256": sha256_file(e.resolved_path)
            if e.status == "inlined" and e.resolved_path is not None
            else None,
        }
        for e in result.events
    ]

    return {
        "schema_version": SCHEMA_VERSION,
        "tool_version": __version__,
        "project_root": str(result.project_root),
        "input": {
            "path": str(result.input_path),
            "sha256": sha256_file(result.input_path),
        },
        "output": {
            "path": str(result.output_path.absolute()),
            "sha256": sha256_file(result.output_path),
        },
        "references": references,
    }


def validate_build_manifest(
    manifest: Mapping[str, Any],
    *,
    schema_path: str | Path | None = None,
) -> None:
    """Validate a build manifest object against the v1 schema.

    Raises:
      jsonschema.exceptions.ValidationError if invalid.
    """

    schema = load_schema(schema_path)
    validator = Draft202012Validator(schema, format_checker=jsonschema.FormatChecker())
    validator.validate(dict(manifest))


def validate_build_manifest_file(
    json_path: str | Path,
    *,
    schema_path: str | Path | None = None,
) -> dict[str, Any]:
    """Load and validate a manifest JSON file; returns the parsed JSON."""

    obj = read_json_file(json_path)
    validate_build_manifest(obj, schema_path=schema_path)
    return obj


def write_build_manifest(result: CompileResult, manifest_path: str | Path) -> Path:
    payload = build_manifest_payload(result)
    validate_build_manifest(payload)

    out = Path(manifest_path)
    write_json_stable(out, payload)
    return out
