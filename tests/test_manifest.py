"""index 匯出檔測試."""
from design_to_code.config import Dialect, GeneratorConfig
from design_to_code.manifest import build_manifest, manifest_file_name
from design_to_code.naming_engine import ComponentIdentity


def test_one_line_per_identity_in_order():
    out = build_manifest(
        [ComponentIdentity("SubmitButton", "submit-button"), ComponentIdentity("NavBar", "nav-bar")],
        GeneratorConfig(),
    )
    assert out == (
        "// React components\n"
        "export { default as SubmitButton } from './submit-button';\n"
        "export { default as NavBar } from './nav-bar';\n"
    )


def test_duplicate_slug_collapses_to_first():
    out = build_manifest(
        [ComponentIdentity("Card", "card"), ComponentIdentity("CARD", "card")],
        GeneratorConfig(Dialect.VUE),
    )
    assert out.splitlines() == [
        "// Vue components",
        "export { default as Card } from './card';",
    ]


def test_header_per_dialect():
    assert build_manifest([], GeneratorConfig(Dialect.SVELTE)) == "// Svelte components\n"


def test_manifest_file_name_follows_typescript():
    assert manifest_file_name(GeneratorConfig(typescript=True)) == "index.ts"
    assert manifest_file_name(GeneratorConfig(typescript=False)) == "index.js"


def test_repeated_display_name_gets_numbered_alias():
    out = build_manifest(
        [
            ComponentIdentity("MyButton", "my-button"),
            ComponentIdentity("MyButton", "mybutton"),
            ComponentIdentity("MyButton2", "my-button2"),
            ComponentIdentity("MyButton", "my-button-"),
        ],
        GeneratorConfig(),
    )
    assert out.splitlines()[1:] == [
        "export { default as MyButton } from './my-button';",
        "export { default as MyButton2 } from './mybutton';",
        "export { default as MyButton22 } from './my-button2';",
        "export { default as MyButton3 } from './my-button-';",
    ]


def test_export_names_unique_for_sibling_spellings():
    from design_to_code.generator import generate_components
    from design_to_code.nodes import parse_node

    root = parse_node({"id": "0", "type": "CANVAS", "name": "Page", "children": [
        {"id": "1", "type": "FRAME", "name": "My Button"},
        {"id": "2", "type": "FRAME", "name": "My_Button"},
    ]})
    result = generate_components(root)
    exports = [line.split(" as ")[1].split(" ")[0] for line in result.manifest_text.splitlines()[1:]]
    assert exports == ["MyButton", "MyButton2"]
    assert len(set(exports)) == len(exports)
