"""
設計節點模型 — Figma JSON → DesignNode

將 Figma REST API / 匯出 JSON 的節點轉為不可變的 DesignNode 樹。
缺漏或格式錯誤的欄位一律視為「不存在」，不拋例外。
"""

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class NodeKind(Enum):
    COMPONENT = "COMPONENT"
    FRAME = "FRAME"
    TEXT = "TEXT"
    GROUP = "GROUP"
    OTHER = "OTHER"


@dataclass(frozen=True)
class BoundingBox:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass(frozen=True)
class Color:
    """RGBA，各通道為 [0, 1] 浮點數."""
    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass(frozen=True)
class Paint:
    type: str
    color: Optional[Color] = None
    visible: bool = True


@dataclass(frozen=True)
class Typography:
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    font_weight: Optional[float] = None


@dataclass(frozen=True)
class DesignNode:
    id: str
    name: str
    kind: NodeKind = NodeKind.OTHER
    type_name: str = ""
    visible: Optional[bool] = None
    bounding_box: Optional[BoundingBox] = None
    fills: tuple = ()
    strokes: tuple = ()
    typography: Optional[Typography] = None
    text_content: Optional[str] = None
    children: tuple = field(default=(), repr=False)

    @property
    def is_visible(self) -> bool:
        # None（未提供）視為可見
        return self.visible is not False

    @property
    def is_qualifying(self) -> bool:
        return self.kind in (NodeKind.COMPONENT, NodeKind.FRAME) and self.is_visible


_KIND_MAP = {kind.value: kind for kind in NodeKind if kind is not NodeKind.OTHER}


def _number(value) -> Optional[float]:
    # bool 是 int 的子類別，需排除
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    # json.load 會把 Infinity / NaN 讀成 float
    if not math.isfinite(number):
        return None
    return number


def _parse_box(raw) -> Optional[BoundingBox]:
    if not isinstance(raw, dict):
        return None
    width, height = _number(raw.get("width")), _number(raw.get("height"))
    if width is None or height is None:
        return None
    return BoundingBox(
        x=_number(raw.get("x")) or 0.0,
        y=_number(raw.get("y")) or 0.0,
        width=width,
        height=height,
    )


def _parse_color(raw) -> Optional[Color]:
    if not isinstance(raw, dict):
        return None
    channels = [_number(raw.get(key)) for key in ("r", "g", "b")]
    if any(c is None for c in channels):
        return None
    alpha = _number(raw.get("a"))
    return Color(*channels, a=1.0 if alpha is None else alpha)


def _parse_paints(raw) -> tuple:
    if not isinstance(raw, list):
        return ()
    paints = []
    for item in raw:
        if not isinstance(item, dict) or not isinstance(item.get("type"), str):
            continue
        paints.append(Paint(
            type=item["type"],
            color=_parse_color(item.get("color")),
            visible=item.get("visible", True) is not False,
        ))
    return tuple(paints)


def _parse_typography(raw: dict) -> Optional[Typography]:
    # REST API 放在 style 區塊；舊版匯出直接放在節點上
    style = raw.get("style") if isinstance(raw.get("style"), dict) else {}
    size = _number(style.get("fontSize", raw.get("fontSize")))
    family = style.get("fontFamily", raw.get("fontFamily"))
    weight = _number(style.get("fontWeight", raw.get("fontWeight")))
    if not isinstance(family, str):
        family = None
    if size is None and family is None and weight is None:
        return None
    return Typography(font_size=size, font_family=family, font_weight=weight)


def _parse_text(raw: dict) -> Optional[str]:
    for key in ("characters", "textContent"):
        value = raw.get(key)
        if isinstance(value, str):
            return value
    return None


def _parse_fields(raw: dict) -> dict:
    type_name = raw.get("type") if isinstance(raw.get("type"), str) else ""
    visible = raw.get("visible")
    node_id = raw.get("id")
    name = raw.get("name")
    return {
        "id": str(node_id) if node_id is not None else "",
        "name": name if isinstance(name, str) else "",
        "kind": _KIND_MAP.get(type_name, NodeKind.OTHER),
        "type_name": type_name,
        "visible": visible if isinstance(visible, bool) else None,
        "bounding_box": _parse_box(raw.get("absoluteBoundingBox", raw.get("boundingBox"))),
        "fills": _parse_paints(raw.get("fills")),
        "strokes": _parse_paints(raw.get("strokes")),
        "typography": _parse_typography(raw),
        "text_content": _parse_text(raw),
    }


def _child_dicts(raw: dict) -> list:
    children = raw.get("children")
    if not isinstance(children, list):
        return []
    return [c for c in children if isinstance(c, dict)]


def parse_node(raw: dict) -> DesignNode:
    """將單一 Figma 節點（含子樹）轉成 DesignNode.

    以顯式堆疊做後序走訪，避免深層文件觸發遞迴上限；frozen dataclass 需由下而上
    建構。同一個 dict 出現在多個父節點下時共用同一個 DesignNode；指回祖先的
    子節點（循環）直接略過。
    """
    if not isinstance(raw, dict):
        raise TypeError(f"expected a node object, got {type(raw).__name__}")

    built: dict[int, DesignNode] = {}
    on_path = set()
    stack = [(raw, False)]
    while stack:
        current, finished = stack.pop()
        key = id(current)
        if finished:
            on_path.discard(key)
            child_nodes = tuple(built[id(c)] for c in _child_dicts(current) if id(c) in built)
            built[key] = DesignNode(children=child_nodes, **_parse_fields(current))
            continue
        if key in built or key in on_path:
            continue
        on_path.add(key)
        stack.append((current, True))
        stack.extend((c, False) for c in reversed(_child_dicts(current)))
    return built[id(raw)]


def parse_document(data: dict) -> DesignNode:
    """接受完整檔案匯出、/nodes 回應、節點清單或單一節點，回傳唯一根節點."""
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")

    if isinstance(data.get("document"), dict):
        return parse_node(data["document"])

    nodes = data.get("nodes")
    if isinstance(nodes, dict):
        # GET /files/:key/nodes → { id: { "document": {...} } }
        roots = [v["document"] for v in nodes.values()
                 if isinstance(v, dict) and isinstance(v.get("document"), dict)]
        return parse_node({"id": "", "name": data.get("name", ""), "type": "DOCUMENT", "children": roots})
    if isinstance(nodes, list):
        return parse_node({"id": "", "name": data.get("name", ""), "type": "DOCUMENT", "children": nodes})

    return parse_node(data)


def load_document(path) -> DesignNode:
    with open(Path(path), "r", encoding="utf-8") as f:
        return parse_document(json.load(f))
