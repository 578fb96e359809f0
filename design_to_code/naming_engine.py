"""
命名引擎 — 圖層名稱 → 組件名稱 / 檔名

display_name：PascalCase，僅 [A-Za-z0-9]
file_slug：小寫連字號，僅 [a-z0-9-]，最長 50 字元
清理後為空時改用 Component{N} / component-{N}（N 為本次執行的匿名計數，
會跳過已被真實名稱佔用的 slug）。
"""

import re
from dataclasses import dataclass
from typing import Optional

from .nodes import DesignNode, NodeKind

MAX_SLUG_LENGTH = 50

_TOKEN_SPLIT = re.compile(r"[\s\-_]+")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^a-z0-9-]")


@dataclass(frozen=True)
class ComponentIdentity:
    display_name: str
    file_slug: str
    source_name: str = ""


@dataclass(frozen=True)
class NameCollision:
    """同一次產生中 file_slug 重複；先出現者勝出."""
    file_slug: str
    kept: str
    dropped: str


def to_pascal_case(name: str) -> str:
    words = _TOKEN_SPLIT.split(name)
    joined = "".join(w[:1].upper() + w[1:].lower() for w in words)
    return _NON_ALNUM.sub("", joined)


def to_file_slug(name: str) -> str:
    slug = _WHITESPACE.sub("-", name.lower())
    return _NON_SLUG.sub("", slug)[:MAX_SLUG_LENGTH]


class NamingEngine:
    """為同一次產生分配組件名稱，並記錄 slug 衝突.

    每次產生請使用新的實例；匿名計數與已用 slug 都只屬於該次執行。
    """

    def __init__(self, fallback_name: str = "Component"):
        self.fallback_name = fallback_name
        self.collisions: list[NameCollision] = []
        self._anonymous = 0
        self._seen_slugs: dict[str, ComponentIdentity] = {}
        self._reserved: set[str] = set()

    def reserve(self, raw_names) -> None:
        """預先登記本次執行會出現的真實名稱；匿名 fallback 會跳過這些 slug."""
        for raw_name in raw_names:
            slug = to_file_slug(raw_name or "")
            if slug.strip("-"):
                self._reserved.add(slug)

    def _next_anonymous(self) -> int:
        while True:
            self._anonymous += 1
            slug = to_file_slug(f"{self.fallback_name}-{self._anonymous}")
            if slug not in self._reserved and slug not in self._seen_slugs:
                return self._anonymous

    def resolve(self, raw_name: Optional[str]) -> ComponentIdentity:
        raw_name = raw_name or ""
        display_name = to_pascal_case(raw_name)
        file_slug = to_file_slug(raw_name)

        # 只剩連字號的 slug 與空字串同樣視為匿名
        if not display_name or not file_slug.strip("-"):
            number = self._next_anonymous()
            display_name = display_name or f"{self.fallback_name}{number}"
            if not file_slug.strip("-"):
                file_slug = to_file_slug(f"{self.fallback_name}-{number}")

        # JS 識別字不可以數字開頭
        if display_name[0].isdigit():
            display_name = f"{self.fallback_name}{display_name}"

        identity = ComponentIdentity(display_name, file_slug, raw_name)
        kept = self._seen_slugs.get(file_slug)
        if kept is None:
            self._seen_slugs[file_slug] = identity
        else:
            self.collisions.append(NameCollision(file_slug, kept.source_name, raw_name))
        return identity


def preview_naming_tree(node: DesignNode, engine: Optional[NamingEngine] = None, indent: int = 0) -> str:
    """除錯用：印出節點樹，合格節點附上組件名稱與檔名."""
    engine = engine or NamingEngine()
    lines = []
    stack = [(node, indent)]
    while stack:
        current, depth = stack.pop()
        prefix = "  " * depth
        label = f"{prefix}├─ {current.name or '∅'}  [{current.type_name or current.kind.value}]"
        if not current.is_visible:
            lines.append(f"{label}  (hidden)")
            continue
        if current.is_qualifying:
            identity = engine.resolve(current.name)
            label += f"  → {identity.display_name} ({identity.file_slug})"
        elif current.kind is NodeKind.TEXT and current.text_content:
            label += f"  “{current.text_content}”"
        lines.append(label)
        stack.extend((child, depth + 1) for child in reversed(current.children))
    return "\n".join(lines)
