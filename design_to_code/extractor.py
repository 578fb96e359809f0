"""
Property extraction — DesignNode → PropertyRecord.

Each rule is applied independently; absent or malformed attributes simply
leave the corresponding field empty.
"""

import math
import re
from dataclasses import dataclass
from typing import Optional

from .nodes import Color, DesignNode, NodeKind, Typography

DEFAULT_FONT_SIZE = 14
DEFAULT_FONT_WEIGHT = 400

PLACEHOLDER_PATTERN = re.compile(r"\$\{(\w+)\}")


@dataclass(frozen=True)
class Dimensions:
    width: float
    height: float


@dataclass(frozen=True)
class PropertyRecord:
    dimensions: Optional[Dimensions] = None
    background_hex: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[float] = None
    template_inputs: tuple = ()


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 → 3, -2.5 → -3)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _finite(value) -> bool:
    return value is not None and math.isfinite(value)


def _channel(value: float) -> int:
    return max(0, min(255, round_half_away(value * 255)))


def color_to_hex(color: Color) -> str:
    return f"#{_channel(color.r):02X}{_channel(color.g):02X}{_channel(color.b):02X}"


def background_hex(node: DesignNode) -> Optional[str]:
    # Only the first fill is consulted; a non-solid first fill means no background.
    if not node.fills:
        return None
    first = node.fills[0]
    if first.type != "SOLID" or first.color is None:
        return None
    color = first.color
    if not all(_finite(c) for c in (color.r, color.g, color.b)):
        return None
    return color_to_hex(color)


def find_template_inputs(node: DesignNode, nested: bool = False) -> tuple:
    """Collect `${name}` placeholders from TEXT children in first-seen order.

    With `nested=True` the whole subtree is scanned (depth-first, document
    order) instead of the direct children only.
    """
    found: dict[str, None] = {}
    stack = list(reversed(node.children))
    while stack:
        child = stack.pop()
        if child.kind is NodeKind.TEXT and child.text_content:
            for name in PLACEHOLDER_PATTERN.findall(child.text_content):
                found.setdefault(name, None)
        if nested:
            stack.extend(reversed(child.children))
    return tuple(found)


def extract_properties(node: DesignNode, nested_inputs: bool = False) -> PropertyRecord:
    dimensions = None
    box = node.bounding_box
    if box is not None and _finite(box.width) and _finite(box.height):
        dimensions = Dimensions(box.width, box.height)

    font_size = font_weight = None
    if node.text_content:
        typography = node.typography or Typography()
        size, weight = typography.font_size, typography.font_weight
        font_size = size if _finite(size) and size else DEFAULT_FONT_SIZE
        font_weight = weight if _finite(weight) and weight else DEFAULT_FONT_WEIGHT

    return PropertyRecord(
        dimensions=dimensions,
        background_hex=background_hex(node),
        font_size=font_size,
        font_weight=font_weight,
        template_inputs=find_template_inputs(node, nested=nested_inputs),
    )
