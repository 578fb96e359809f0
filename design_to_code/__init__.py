"""
design-to-code — Figma 設計 → React / Vue / Svelte 組件

讀取 Figma 文件樹，為每個可見的 COMPONENT / FRAME 產生組件原始碼與 index 匯出檔。
"""

__version__ = "0.1.0"

from .nodes import DesignNode, NodeKind, parse_node, parse_document, load_document
from .naming_engine import (
    ComponentIdentity,
    NameCollision,
    NamingEngine,
    to_pascal_case,
    to_file_slug,
    preview_naming_tree,
)
from .extractor import PropertyRecord, extract_properties
from .styles import StyleConverter, SynthesizedStyle, synthesize_style
from .renderers import RenderedComponent, render_component
from .manifest import build_manifest
from .config import Dialect, GeneratorConfig, config_from_dict, load_config, validate_config
from .figma_reader import FigmaAPIClient, FigmaAPIError, extract_file_key
from .generator import (
    CyclicDocumentError,
    GenerationResult,
    MissingRequiredInput,
    collect_qualifying_nodes,
    generate_components,
    generate_from_figma,
    write_output,
)

__all__ = [
    "__version__",
    "DesignNode",
    "NodeKind",
    "parse_node",
    "parse_document",
    "load_document",
    "ComponentIdentity",
    "NameCollision",
    "NamingEngine",
    "to_pascal_case",
    "to_file_slug",
    "preview_naming_tree",
    "PropertyRecord",
    "extract_properties",
    "StyleConverter",
    "SynthesizedStyle",
    "synthesize_style",
    "RenderedComponent",
    "render_component",
    "build_manifest",
    "Dialect",
    "GeneratorConfig",
    "config_from_dict",
    "load_config",
    "validate_config",
    "FigmaAPIClient",
    "FigmaAPIError",
    "extract_file_key",
    "CyclicDocumentError",
    "GenerationResult",
    "MissingRequiredInput",
    "collect_qualifying_nodes",
    "generate_components",
    "generate_from_figma",
    "write_output",
]
