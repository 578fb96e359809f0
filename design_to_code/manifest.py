"""Manifest builder — one re-export line per generated component."""

from typing import Iterable

from .config import Dialect, GeneratorConfig
from .naming_engine import ComponentIdentity

_HEADERS = {
    Dialect.REACT: "// React components",
    Dialect.VUE: "// Vue components",
    Dialect.SVELTE: "// Svelte components",
}


def manifest_file_name(config: GeneratorConfig) -> str:
    return "index.ts" if config.typescript else "index.js"


def build_manifest(identities: Iterable[ComponentIdentity], config: GeneratorConfig) -> str:
    """Re-export every identity from `./{file_slug}` in encounter order.

    Identities sharing a file_slug collapse to the first one seen. Distinct
    slugs whose display_name is already exported get a numbered alias
    (`MyButton2`, `MyButton3`, ...) so every export name is unique.
    """
    lines = [_HEADERS[config.framework]]
    seen = set()
    exported = set()
    for identity in identities:
        if identity.file_slug in seen:
            continue
        seen.add(identity.file_slug)
        export_name = _unique_export_name(identity.display_name, exported)
        exported.add(export_name)
        lines.append(f"export {{ default as {export_name} }} from './{identity.file_slug}';")
    return "\n".join(lines) + "\n"


def _unique_export_name(name: str, exported: set) -> str:
    candidate, suffix = name, 2
    while candidate in exported:
        candidate = f"{name}{suffix}"
        suffix += 1
    return candidate
