"""
Dialect renderers — React function components, Vue SFCs and Svelte components.

Every renderer has the same signature

    render(identity, record, style, children, config) -> str

and sees exactly the same normalized model; the dialects only differ in
surface syntax. Children are rendered one level deep: TEXT children become a
paragraph, anything else an opaque placeholder <div> named in a comment.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from .config import Dialect, GeneratorConfig
from .extractor import PropertyRecord
from .naming_engine import ComponentIdentity
from .nodes import DesignNode, NodeKind
from .styles import SynthesizedStyle, css_block, jsx_style_object

ROOT_CLASS = "component-root"


@dataclass(frozen=True)
class RenderedComponent:
    source_text: str
    file_name: str
    identity: ComponentIdentity


# ─── Shared helpers ──────────────────────────────────────────────────────────

def _safe_comment(text: str) -> str:
    # 避免名稱提前結束註解
    return text.replace("*/", "* /").replace("-->", "-- >")


_TEXT_ESCAPES = str.maketrans({
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "{": "&#123;",
    "}": "&#125;",
})


def _escape_text(text: str) -> str:
    # JSX / Svelte 以 {} 插值，Vue 以 {{ }}；一律改成 HTML 實體
    return text.translate(_TEXT_ESCAPES)


def _child_lines(children: Sequence[DesignNode], pad: str, comment: Callable[[str], str]) -> list:
    lines = []
    for child in children:
        if not child.is_visible:
            continue
        if child.kind is NodeKind.TEXT:
            lines.append(f"{pad}<p>{_escape_text(child.text_content or child.name)}</p>")
        else:
            lines.append(f"{pad}<div>{comment(child.name)}</div>")
    return lines


def _body_lines(node_name: str, text_content, children, pad: str, comment) -> list:
    lines = [f"{pad}{comment(f'{node_name} Component')}"]
    visible = [c for c in children if c.is_visible]
    if visible:
        lines.extend(_child_lines(visible, pad, comment))
    elif not children and text_content:
        lines.append(f"{pad}<p>{_escape_text(text_content)}</p>")
    return lines


def _jsx_comment(text: str) -> str:
    return f"{{/* {_safe_comment(text)} */}}"


def _html_comment(text: str) -> str:
    return f"<!-- {_safe_comment(text)} -->"


def _markup_attrs(identity: ComponentIdentity, style: SynthesizedStyle, class_attr: str) -> str:
    attrs = []
    if style.is_utility:
        if style.classes:
            attrs.append(f'{class_attr}="{style.classes}"')
    else:
        attrs.append(f'{class_attr}="{ROOT_CLASS}"')
    attrs.append(f'data-testid="{identity.file_slug}"')
    return " ".join(attrs)


def _stylesheet_properties(style: SynthesizedStyle) -> dict:
    return {"box-sizing": "border-box", **style.properties}


# ─── React ───────────────────────────────────────────────────────────────────

def render_react(
    identity: ComponentIdentity,
    record: PropertyRecord,
    style: SynthesizedStyle,
    children: Sequence[DesignNode],
    config: GeneratorConfig,
    text_content: Optional[str] = None,
) -> str:
    name = identity.display_name
    inputs = record.template_inputs
    params = f"{{ {', '.join(inputs)} }}" if inputs else ""

    attrs = []
    if style.is_utility:
        if style.classes:
            attrs.append(f'className="{style.classes}"')
    elif style.properties:
        attrs.append(f"style={{{jsx_style_object(style.properties)}}}")
    attrs.append(f'data-testid="{identity.file_slug}"')

    body = "\n".join(_body_lines(identity.source_name or name, text_content, children, " " * 6, _jsx_comment))

    if config.typescript:
        members = "".join(f"  {p}?: string | number;\n" for p in inputs)
        head = (
            "import React from 'react';\n\n"
            f"export interface {name}Props {{\n{members}}}\n\n"
            "/**\n"
            f" * {name} component, generated from the design.\n"
            " */\n"
            f"export const {name}: React.FC<{name}Props> = ({params}) => {{\n"
        )
    else:
        docs = "".join(f" * @param {{string|number}} [props.{p}]\n" for p in inputs)
        param_doc = f" *\n * @param {{object}} props\n{docs}" if inputs else ""
        head = (
            "import React from 'react';\n\n"
            "/**\n"
            f" * {name} component, generated from the design.\n"
            f"{param_doc}"
            " */\n"
            f"export const {name} = ({params}) => {{\n"
        )

    return (
        head
        + "  return (\n"
        + f"    <div {' '.join(attrs)}>\n"
        + body + "\n"
        + "    </div>\n"
        + "  );\n"
        + "};\n\n"
        + f"export default {name};\n"
    )


# ─── Vue ─────────────────────────────────────────────────────────────────────

def render_vue(
    identity: ComponentIdentity,
    record: PropertyRecord,
    style: SynthesizedStyle,
    children: Sequence[DesignNode],
    config: GeneratorConfig,
    text_content: Optional[str] = None,
) -> str:
    name = identity.display_name
    inputs = record.template_inputs
    body = "\n".join(_body_lines(identity.source_name or name, text_content, children, " " * 4, _html_comment))

    props = ""
    if inputs:
        entries = "".join(
            f"    {p}: {{ type: [String, Number], required: false }},\n" for p in inputs
        )
        props = f"  props: {{\n{entries}  }},\n"

    if config.typescript:
        script = (
            '<script lang="ts">\n'
            "import { defineComponent } from 'vue';\n\n"
            "export default defineComponent({\n"
            f"  name: '{name}',\n"
            f"{props}"
            "});\n"
            "</script>\n"
        )
    else:
        script = (
            "<script>\n"
            "export default {\n"
            f"  name: '{name}',\n"
            f"{props}"
            "};\n"
            "</script>\n"
        )

    out = (
        "<template>\n"
        f"  <div {_markup_attrs(identity, style, 'class')}>\n"
        f"{body}\n"
        "  </div>\n"
        "</template>\n\n"
        + script
    )
    if not style.is_utility:
        out += (
            "\n<style scoped>\n"
            + css_block(f".{ROOT_CLASS}", _stylesheet_properties(style))
            + "\n</style>\n"
        )
    return out


# ─── Svelte ──────────────────────────────────────────────────────────────────

def render_svelte(
    identity: ComponentIdentity,
    record: PropertyRecord,
    style: SynthesizedStyle,
    children: Sequence[DesignNode],
    config: GeneratorConfig,
    text_content: Optional[str] = None,
) -> str:
    name = identity.display_name
    inputs = record.template_inputs
    body = "\n".join(_body_lines(identity.source_name or name, text_content, children, " " * 2, _html_comment))

    out = (
        "<!--\n"
        f"  @component {name}\n"
        "  Generated from the design.\n"
        "-->\n"
    )
    if inputs:
        if config.typescript:
            decls = "".join(f"  export let {p}: string | number | undefined = undefined;\n" for p in inputs)
            out += f'<script lang="ts">\n{decls}</script>\n\n'
        else:
            decls = "".join(
                f"  /** @type {{string|number|undefined}} */\n  export let {p} = undefined;\n" for p in inputs
            )
            out += f"<script>\n{decls}</script>\n\n"
    else:
        out += "\n"

    out += (
        f"<div {_markup_attrs(identity, style, 'class')}>\n"
        f"{body}\n"
        "</div>\n"
    )
    if not style.is_utility:
        out += (
            "\n<style>\n"
            + css_block(f".{ROOT_CLASS}", _stylesheet_properties(style), indent="  ")
            + "\n</style>\n"
        )
    return out


# ─── Dispatch ────────────────────────────────────────────────────────────────

RENDERERS: Dict[Dialect, Callable[..., str]] = {
    Dialect.REACT: render_react,
    Dialect.VUE: render_vue,
    Dialect.SVELTE: render_svelte,
}


def file_extension(config: GeneratorConfig) -> str:
    if config.framework is Dialect.REACT:
        return "tsx" if config.typescript else "jsx"
    if config.framework is Dialect.VUE:
        return "vue"
    if config.framework is Dialect.SVELTE:
        return "svelte"
    raise ValueError(f"Unsupported framework: {config.framework}")


def render_component(
    identity: ComponentIdentity,
    node: DesignNode,
    record: PropertyRecord,
    style: SynthesizedStyle,
    config: GeneratorConfig,
) -> RenderedComponent:
    renderer = RENDERERS[config.framework]
    source = renderer(identity, record, style, node.children, config, text_content=node.text_content)
    return RenderedComponent(
        source_text=source,
        file_name=f"{identity.file_slug}.{file_extension(config)}",
        identity=identity,
    )
