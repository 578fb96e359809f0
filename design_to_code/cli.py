#!/usr/bin/env python3
"""
design-to-code CLI — Figma JSON → React / Vue / Svelte 組件

  design-to-code convert design.json -f react -o ./components
  design-to-code batch ./exports -f vue
  design-to-code fetch --file-key KEY           # 直接從 Figma API 下載
  design-to-code preview design.json            # 預覽組件命名
  design-to-code watch design.json              # 匯出檔變更時自動重新產生
"""

import argparse
import json
import os
import sys
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import __version__
from .config import DEFAULT_CONFIG_PATH, GeneratorConfig, config_from_dict, load_config
from .figma_reader import FigmaAPIError
from .generator import (
    GenerationResult,
    MissingRequiredInput,
    count_kinds,
    generate_components,
    generate_from_figma,
    write_output,
)
from .naming_engine import preview_naming_tree
from .nodes import load_document


def _build_config(args, config: dict) -> GeneratorConfig:
    return config_from_dict(
        config,
        framework=getattr(args, "framework", None),
        typescript=getattr(args, "typescript", None),
        tailwind=True if getattr(args, "tailwind", False) else None,
        nested_inputs=True if getattr(args, "nested_inputs", False) else None,
        output_dir=getattr(args, "output", None),
    )


def _report(result: GenerationResult, gen_config: GeneratorConfig, verbose: bool) -> None:
    for collision in result.collisions:
        print(f"   ⚠️  '{collision.dropped}' 與 '{collision.kept}' 檔名相同（{collision.file_slug}），保留先出現者。")
    if verbose:
        for component in result.components:
            print(f"   ✓ {component.file_name}  ({component.identity.display_name})")
    print(f"\n✅ Generated {len(result.components)} components")
    print(f"   Output: {Path(gen_config.output_dir).resolve()}")
    print(f"   Framework: {gen_config.framework.value}")
    print(f"   TypeScript: {'yes' if gen_config.typescript else 'no'}")


def convert_file(path: str, gen_config: GeneratorConfig, verbose: bool = False) -> int:
    """轉換單一匯出檔，回傳產生的組件數（沒有合格節點時為 0）."""
    document = load_document(path)
    try:
        result = generate_components(document, gen_config)
    except MissingRequiredInput:
        print(f"   ⚠️  {path}: 找不到可見的 COMPONENT / FRAME 節點，產生 0 個組件。")
        return 0
    write_output(result, gen_config.output_dir)
    _report(result, gen_config, verbose)
    return len(result.components)


def cmd_convert(args, config: dict) -> int:
    if not os.path.exists(args.figma_json):
        print(f"❌ File not found: {args.figma_json}")
        return 1
    gen_config = _build_config(args, config)
    print(f"🚀 Converting {args.figma_json} → {gen_config.framework.value}")
    try:
        convert_file(args.figma_json, gen_config, args.verbose)
    except (json.JSONDecodeError, TypeError) as e:
        print(f"❌ 無法解析 {args.figma_json}: {e}")
        return 1
    return 0


def cmd_batch(args, config: dict) -> int:
    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"❌ Directory not found: {directory}")
        return 1
    files = sorted(directory.glob("*.json"))
    if not files:
        print("⚠️  No JSON files found in directory")
        return 0

    gen_config = _build_config(args, config)
    total = 0
    for path in files:
        if args.verbose:
            print(f"📄 Processing {path.name}...")
        try:
            total += convert_file(str(path), gen_config, args.verbose)
        except (OSError, json.JSONDecodeError, TypeError) as e:
            print(f"   ❌ Error processing {path.name}: {e}")

    print("\n✅ Batch complete")
    print(f"   Total components: {total}")
    print(f"   Output: {Path(gen_config.output_dir).resolve()}")
    return 0


def cmd_fetch(args, config: dict) -> int:
    """Fetch: 從 Figma API 下載後直接產生組件."""
    figma_cfg = config.get("figma", {})
    token = figma_cfg.get("personalAccessToken") or os.environ.get("FIGMA_TOKEN")
    file_key = args.file_key or figma_cfg.get("fileKey")

    if not token:
        print(f"❌ 請設定 FIGMA_TOKEN 環境變數，或在 {DEFAULT_CONFIG_PATH} 的 figma.personalAccessToken 設定。")
        print("   取得方式：Figma → Settings → Personal access tokens → 新增")
        return 1
    if not file_key:
        print("❌ 請使用 --file-key 或在 config 的 figma.fileKey 設定 Figma 檔案 key。")
        return 1

    gen_config = _build_config(args, config)
    node_ids = [n.strip() for n in args.ids.split(",") if n.strip()] if args.ids else None
    print(f"📥 Fetching from Figma: {file_key}")
    try:
        result = generate_from_figma(token, file_key, gen_config, node_ids=node_ids)
    except FigmaAPIError as e:
        print(f"❌ Figma API {e.status_code}：{e}")
        return 1
    except MissingRequiredInput:
        print("   ⚠️  找不到可見的 COMPONENT / FRAME 節點，產生 0 個組件。")
        return 0
    write_output(result, gen_config.output_dir)
    _report(result, gen_config, args.verbose)
    return 0


def cmd_preview(args, config: dict) -> int:
    """預覽命名樹."""
    document = load_document(args.figma_json)
    print(f"👁️  Preview: {args.figma_json}")
    print(preview_naming_tree(document))
    counts = count_kinds(document)
    print(f"\nComponents: {counts['components']}  Frames: {counts['frames']}")
    return 0


_WATCHED_EXTENSIONS = (".json",)


class ChangeHandler(FileSystemEventHandler):
    """檔案變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback, target: str, debounce: float = 1.0):
        self.callback = callback
        self.target = os.path.abspath(target)
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def on_modified(self, event):
        if event.is_directory:
            return
        if not event.src_path.endswith(_WATCHED_EXTENSIONS):
            return
        if os.path.abspath(event.src_path) != self.target:
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 File changed: {event.src_path}")
        self.callback()


def cmd_watch(args, config: dict) -> int:
    """Watch: 監聽匯出檔變更並自動重新產生."""
    target = args.figma_json
    if not os.path.exists(target):
        print(f"❌ File not found: {target}")
        return 1
    gen_config = _build_config(args, config)
    print(f"👀 Watching '{target}'...")
    print("   Press Ctrl+C to stop.")

    def regenerate():
        try:
            convert_file(target, gen_config, args.verbose)
        except (OSError, json.JSONDecodeError, TypeError) as e:
            # 編輯器寫檔途中可能讀到不完整 JSON，等下一次事件
            print(f"   ⚠️  Regenerate failed: {e}")

    regenerate()

    event_handler = ChangeHandler(regenerate, target)
    observer = Observer()
    observer.schedule(event_handler, path=os.path.dirname(os.path.abspath(target)), recursive=False)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
        observer.stop()
    finally:
        observer.join()
    return 0


def _add_generate_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--framework", "-f", choices=["react", "vue", "svelte"], help="Target framework (default: react)")
    p.add_argument("--output", "-o", help="Output directory (default: ./components)")
    p.add_argument("--typescript", "-t", dest="typescript", action="store_true", default=None,
                   help="Generate TypeScript (default)")
    p.add_argument("--no-typescript", dest="typescript", action="store_false", help="Generate plain JavaScript")
    p.add_argument("--tailwind", action="store_true", help="Use Tailwind utility classes")
    p.add_argument("--nested-inputs", action="store_true",
                   help="Scan the whole subtree for ${placeholders}, not only direct children")
    p.add_argument("--verbose", "-v", action="store_true", help="Verbose output")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="design-to-code",
        description="design-to-code: Figma → React / Vue / Svelte components",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    convert_p = sub.add_parser("convert", help="Convert a Figma JSON export to components",
        epilog="Examples:\n  design-to-code convert design.json\n  design-to-code convert design.json -f vue --tailwind -o ./src/components",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    convert_p.add_argument("figma_json", help="Path to exported Figma JSON file")
    _add_generate_options(convert_p)

    batch_p = sub.add_parser("batch", help="Convert every Figma JSON file in a directory")
    batch_p.add_argument("directory", help="Directory containing Figma JSON files")
    _add_generate_options(batch_p)

    fetch_p = sub.add_parser("fetch", help="Fetch from the Figma API and convert",
        epilog="Examples:\n  design-to-code fetch --file-key ABC123\n  design-to-code fetch --file-key https://www.figma.com/design/ABC123/App --ids 1:2,1:3",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    fetch_p.add_argument("--file-key", help="Figma file key or URL")
    fetch_p.add_argument("--ids", help="Comma separated node ids to convert")
    _add_generate_options(fetch_p)

    preview_p = sub.add_parser("preview", help="Preview component naming")
    preview_p.add_argument("figma_json", help="Path to exported Figma JSON file")

    watch_p = sub.add_parser("watch", help="Regenerate when the export file changes")
    watch_p.add_argument("figma_json", help="Path to exported Figma JSON file")
    _add_generate_options(watch_p)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    commands = {
        "convert": cmd_convert,
        "batch": cmd_batch,
        "fetch": cmd_fetch,
        "preview": cmd_preview,
        "watch": cmd_watch,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0
    return handler(args, config)


if __name__ == "__main__":
    sys.exit(main())
