"""設定檔載入、基本驗證與 GeneratorConfig."""

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = "design-to-code.config.json"

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "generate"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "fileKey"},
    "generate": {"framework", "typescript", "tailwind", "outputDir", "nestedInputs"},
}

_BOOL_KEYS = ("typescript", "tailwind", "nestedInputs")


class Dialect(Enum):
    """輸出方言；新增或移除方言時，renderers 的對照表也必須同步更新."""
    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"


_VALID_FRAMEWORKS = {d.value for d in Dialect}


@dataclass(frozen=True)
class GeneratorConfig:
    framework: Dialect = Dialect.REACT
    typescript: bool = True
    tailwind: bool = False
    output_dir: str = "./components"
    nested_inputs: bool = False


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    generate = cfg.get("generate", {})
    if not isinstance(generate, dict):
        return

    # generate.framework 值驗證
    framework = generate.get("framework")
    if framework and framework not in _VALID_FRAMEWORKS:
        valid = ", ".join(sorted(_VALID_FRAMEWORKS))
        _warn(f"generate.framework '{framework}' 不在已知值中（{valid}）")

    for key in _BOOL_KEYS:
        val = generate.get(key)
        if val is not None and not isinstance(val, bool):
            _warn(f"generate.{key} 應為布林值，目前是 {type(val).__name__}")

    output_dir = generate.get("outputDir")
    if output_dir is not None and not isinstance(output_dir, str):
        _warn(f"generate.outputDir 應為字串，目前是 {type(output_dir).__name__}")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def config_from_dict(cfg: dict, **overrides) -> GeneratorConfig:
    """由設定檔內容建立 GeneratorConfig；overrides 中非 None 的值優先（CLI 參數）.

    無效的值直接忽略，回落到預設值。
    """
    generate = cfg.get("generate", {}) if isinstance(cfg, dict) else {}
    if not isinstance(generate, dict):
        generate = {}

    values: dict = {}
    framework = generate.get("framework")
    if framework in _VALID_FRAMEWORKS:
        values["framework"] = Dialect(framework)
    for key, field_name in (("typescript", "typescript"), ("tailwind", "tailwind"),
                            ("nestedInputs", "nested_inputs")):
        if isinstance(generate.get(key), bool):
            values[field_name] = generate[key]
    if isinstance(generate.get("outputDir"), str) and generate["outputDir"]:
        values["output_dir"] = generate["outputDir"]

    for key, value in overrides.items():
        if value is None:
            continue
        if key == "framework" and not isinstance(value, Dialect):
            value = Dialect(value)
        values[key] = value

    return GeneratorConfig(**values)
