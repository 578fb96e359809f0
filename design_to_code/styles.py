"""
Style synthesis — PropertyRecord → Tailwind class string or CSS property map.
"""

import re
from dataclasses import dataclass
from typing import Optional

from .extractor import PropertyRecord, round_half_away


def _px(value: float) -> str:
    return f"{round_half_away(value)}px"


class StyleConverter:
    """PropertyRecord ↔ Tailwind / CSS 轉換."""

    @staticmethod
    def to_tailwind(record: PropertyRecord) -> str:
        classes = []
        if record.dimensions is not None:
            classes.append(f"w-[{_px(record.dimensions.width)}]")
            classes.append(f"h-[{_px(record.dimensions.height)}]")
        if record.background_hex:
            classes.append(f"bg-[{record.background_hex}]")
        if record.font_size is not None:
            if record.font_size > 16:
                classes.append(f"text-[{_px(record.font_size)}]")
            else:
                classes.append(f"text-{round_half_away(record.font_size / 4)}")
        return " ".join(classes)

    @staticmethod
    def to_css(record: PropertyRecord) -> dict:
        css_props = {}
        if record.dimensions is not None:
            css_props["width"] = _px(record.dimensions.width)
            css_props["height"] = _px(record.dimensions.height)
        if record.background_hex:
            css_props["background-color"] = record.background_hex
        if record.font_size is not None:
            css_props["font-size"] = _px(record.font_size)
        if record.font_weight is not None:
            css_props["font-weight"] = str(round_half_away(record.font_weight))
        return css_props


@dataclass
class SynthesizedStyle:
    """One of the two mutually exclusive style modes for a component."""
    classes: Optional[str] = None
    properties: Optional[dict] = None

    def __post_init__(self) -> None:
        if (self.classes is None) == (self.properties is None):
            raise ValueError("exactly one of classes or properties must be given")

    @property
    def is_utility(self) -> bool:
        return self.classes is not None


def synthesize_style(record: PropertyRecord, tailwind: bool) -> SynthesizedStyle:
    if tailwind:
        return SynthesizedStyle(classes=StyleConverter.to_tailwind(record))
    return SynthesizedStyle(properties=StyleConverter.to_css(record))


# ─── Serialization helpers shared by the renderers ────────────────────────────

def css_block(selector: str, properties: dict, indent: str = "") -> str:
    body = "\n".join(f"{indent}  {prop}: {val};" for prop, val in properties.items())
    return f"{indent}{selector} {{\n{body}\n{indent}}}"


def _camel(prop: str) -> str:
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), prop)


def jsx_style_object(properties: dict) -> str:
    """`{ width: '100px', backgroundColor: '#FFFFFF' }` for a JSX style prop."""
    if not properties:
        return "{}"
    pairs = ", ".join(f"{_camel(prop)}: '{val}'" for prop, val in properties.items())
    return f"{{ {pairs} }}"
