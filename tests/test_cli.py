"""
CLI 指令測試：以 main([...]) 直接呼叫，輸出寫入 tmp_path。
"""
import json
from unittest.mock import patch

import pytest

from design_to_code.cli import build_parser, main
from design_to_code.figma_reader import FigmaAPIError


@pytest.fixture
def export_file(tmp_path, document_raw):
    path = tmp_path / "design.json"
    path.write_text(json.dumps(document_raw), encoding="utf-8")
    return path


@pytest.fixture
def no_config(tmp_path):
    return ["--config", str(tmp_path / "missing.config.json")]


def test_no_command_prints_help(no_config, capsys):
    assert main(no_config) == 0
    assert "usage:" in capsys.readouterr().out


def test_parser_defaults():
    args = build_parser().parse_args(["convert", "x.json"])
    assert args.framework is None
    assert args.typescript is None
    assert args.tailwind is False


def test_convert_writes_components(export_file, tmp_path, no_config, capsys):
    out = tmp_path / "out"
    code = main(no_config + ["convert", str(export_file), "-f", "vue", "-o", str(out), "--no-typescript"])
    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == [
        "index.js", "nav-bar.vue", "nav-item.vue", "submit-button.vue",
    ]
    assert "✅ Generated 3 components" in capsys.readouterr().out


def test_convert_uses_config_file(export_file, tmp_path):
    out = tmp_path / "from-config"
    cfg = tmp_path / "design-to-code.config.json"
    cfg.write_text(json.dumps({"generate": {"framework": "svelte", "outputDir": str(out)}}), encoding="utf-8")
    assert main(["--config", str(cfg), "convert", str(export_file)]) == 0
    assert (out / "submit-button.svelte").exists()
    assert (out / "index.ts").exists()


def test_convert_missing_file(tmp_path, no_config, capsys):
    assert main(no_config + ["convert", str(tmp_path / "ghost.json")]) == 1
    assert "File not found" in capsys.readouterr().out


def test_convert_invalid_json(tmp_path, no_config, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert main(no_config + ["convert", str(bad), "-o", str(tmp_path / "out")]) == 1
    assert "無法解析" in capsys.readouterr().out


def test_convert_without_qualifying_nodes(tmp_path, no_config, capsys):
    empty = tmp_path / "empty.json"
    empty.write_text(json.dumps({"id": "0", "type": "GROUP", "name": "g"}), encoding="utf-8")
    out = tmp_path / "out"
    assert main(no_config + ["convert", str(empty), "-o", str(out)]) == 0
    assert not out.exists()
    assert "0 個組件" in capsys.readouterr().out


def test_batch(tmp_path, document_raw, submit_button_raw, no_config, capsys):
    exports = tmp_path / "exports"
    exports.mkdir()
    (exports / "a.json").write_text(json.dumps(document_raw), encoding="utf-8")
    (exports / "b.json").write_text(json.dumps(submit_button_raw), encoding="utf-8")
    (exports / "broken.json").write_text("[", encoding="utf-8")
    out = tmp_path / "out"
    assert main(no_config + ["batch", str(exports), "-o", str(out), "--tailwind"]) == 0
    printed = capsys.readouterr().out
    assert "Total components: 4" in printed
    assert "Error processing broken.json" in printed
    assert "bg-[#6666F0]" in (out / "submit-button.tsx").read_text(encoding="utf-8")


def test_preview(export_file, no_config, capsys):
    assert main(no_config + ["preview", str(export_file)]) == 0
    out = capsys.readouterr().out
    assert "→ SubmitButton (submit-button)" in out
    assert "Draft  [FRAME]  (hidden)" in out
    assert "Components: 3  Frames: 2" in out


def test_fetch_requires_token(no_config, monkeypatch, capsys):
    monkeypatch.delenv("FIGMA_TOKEN", raising=False)
    assert main(no_config + ["fetch", "--file-key", "KEY"]) == 1
    assert "FIGMA_TOKEN" in capsys.readouterr().out


def test_fetch_requires_file_key(no_config, monkeypatch, capsys):
    monkeypatch.setenv("FIGMA_TOKEN", "t")
    assert main(no_config + ["fetch"]) == 1
    assert "--file-key" in capsys.readouterr().out


def test_fetch_generates(tmp_path, document_raw, no_config, monkeypatch):
    monkeypatch.setenv("FIGMA_TOKEN", "t")
    out = tmp_path / "out"
    with patch("design_to_code.generator.FigmaAPIClient") as client_cls:
        client_cls.return_value.get_file_nodes.return_value = document_raw
        code = main(no_config + ["fetch", "--file-key", "KEY", "--ids", "1:2, 3:1", "-o", str(out)])
    assert code == 0
    client_cls.assert_called_once_with("t")
    client_cls.return_value.get_file_nodes.assert_called_once_with("KEY", ["1:2", "3:1"])
    assert (out / "nav-bar.tsx").exists()


def test_fetch_api_error(no_config, monkeypatch, capsys):
    monkeypatch.setenv("FIGMA_TOKEN", "t")
    with patch("design_to_code.generator.FigmaAPIClient") as client_cls:
        client_cls.return_value.get_file.side_effect = FigmaAPIError("Invalid Figma token.", 403)
        assert main(no_config + ["fetch", "--file-key", "KEY"]) == 1
    assert "403" in capsys.readouterr().out
