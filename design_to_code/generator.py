"""
Generator — DesignNode tree → component sources + index manifest.

`generate_components` is pure: the same tree and GeneratorConfig always yield
byte-identical output. Reading the document and writing files happen in
`load_document`, `generate_from_figma` and `write_output` only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .config import GeneratorConfig
from .extractor import extract_properties
from .figma_reader import FigmaAPIClient, extract_file_key
from .manifest import build_manifest, manifest_file_name
from .naming_engine import NameCollision, NamingEngine
from .nodes import DesignNode, NodeKind, parse_document
from .renderers import RenderedComponent, render_component
from .styles import synthesize_style


class MissingRequiredInput(Exception):
    """No visible COMPONENT or FRAME node found in the document."""


class CyclicDocumentError(ValueError):
    """A node revisits the identity of one of its ancestors."""


@dataclass
class GenerationResult:
    components: List[RenderedComponent]
    manifest_name: str
    manifest_text: str
    collisions: List[NameCollision] = field(default_factory=list)

    @property
    def files(self) -> Dict[str, str]:
        # 同檔名先出現者勝出，與 manifest 一致
        files: Dict[str, str] = {}
        for component in self.components:
            files.setdefault(component.file_name, component.source_text)
        files[self.manifest_name] = self.manifest_text
        return files


def _node_key(node: DesignNode):
    return node.id or id(node)


def collect_qualifying_nodes(root: DesignNode) -> List[DesignNode]:
    """Depth-first, document order, parent before children.

    A hidden node hides its whole subtree.
    """
    found = []
    stack = [(root, frozenset())]
    while stack:
        node, ancestors = stack.pop()
        key = _node_key(node)
        if key in ancestors:
            raise CyclicDocumentError(f"Node '{node.name}' ({node.id}) revisits an ancestor")
        if not node.is_visible:
            continue
        if node.is_qualifying:
            found.append(node)
        path = ancestors | {key}
        stack.extend((child, path) for child in reversed(node.children))
    return found


def count_kinds(root: DesignNode) -> Dict[str, int]:
    counts = {"components": 0, "frames": 0}
    stack = [root]
    while stack:
        node = stack.pop()
        if node.kind is NodeKind.COMPONENT:
            counts["components"] += 1
        elif node.kind is NodeKind.FRAME:
            counts["frames"] += 1
        stack.extend(node.children)
    return counts


def generate_components(
    source: Union[DesignNode, Iterable[DesignNode]],
    config: Optional[GeneratorConfig] = None,
) -> GenerationResult:
    """Render every qualifying node of `source` and build the manifest.

    `source` is either a document root (walked with collect_qualifying_nodes)
    or an already flattened sequence of nodes, which is filtered to the
    qualifying ones in the given order.
    """
    config = config or GeneratorConfig()
    if isinstance(source, DesignNode):
        nodes = collect_qualifying_nodes(source)
    else:
        nodes = [n for n in source if n.is_qualifying]
    if not nodes:
        raise MissingRequiredInput("No visible COMPONENT or FRAME nodes found.")

    namer = NamingEngine()
    namer.reserve(node.name for node in nodes)
    components = []
    for node in nodes:
        identity = namer.resolve(node.name)
        record = extract_properties(node, nested_inputs=config.nested_inputs)
        style = synthesize_style(record, tailwind=config.tailwind)
        components.append(render_component(identity, node, record, style, config))

    return GenerationResult(
        components=components,
        manifest_name=manifest_file_name(config),
        manifest_text=build_manifest((c.identity for c in components), config),
        collisions=list(namer.collisions),
    )


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def write_output(result: GenerationResult, output_dir: str) -> List[Path]:
    base = Path(output_dir)
    written = []
    for file_name, text in result.files.items():
        path = base / file_name
        _write(path, text)
        written.append(path)
    return written


def generate_from_figma(
    figma_token: str,
    file_key: str,
    config: Optional[GeneratorConfig] = None,
    node_ids: Optional[list] = None,
    client: Optional[FigmaAPIClient] = None,
) -> GenerationResult:
    """Fetch a file (or selected nodes) from the Figma API and generate from it."""
    client = client or FigmaAPIClient(figma_token)
    key = extract_file_key(file_key)
    if node_ids:
        data = client.get_file_nodes(key, node_ids)
    else:
        data = client.get_file(key)
    return generate_components(parse_document(data), config)
