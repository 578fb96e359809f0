"""共用測試資料：以 Figma REST 格式描述的最小文件."""
import pytest

from design_to_code.nodes import parse_node


def make_raw(type_="FRAME", name="Node", **kwargs):
    base = {"id": kwargs.pop("id", f"{type_}:{name}"), "type": type_, "name": name}
    base.update(kwargs)
    return base


def text_raw(characters, name="Label", **kwargs):
    return make_raw("TEXT", name, characters=characters, **kwargs)


@pytest.fixture
def submit_button_raw():
    return make_raw(
        "FRAME",
        "Submit Button",
        id="1:2",
        absoluteBoundingBox={"x": 0, "y": 0, "width": 100.4, "height": 40},
        fills=[{"type": "SOLID", "color": {"r": 0.4, "g": 0.4, "b": 0.94, "a": 1}}],
        children=[text_raw("Click me", id="1:3")],
    )


@pytest.fixture
def submit_button(submit_button_raw):
    return parse_node(submit_button_raw)


@pytest.fixture
def greeting_card():
    return parse_node(make_raw(
        "COMPONENT",
        "Greeting Card",
        id="2:1",
        absoluteBoundingBox={"x": 0, "y": 0, "width": 320, "height": 120},
        children=[
            text_raw("Hello, ${userName}", id="2:2", name="Greeting"),
            text_raw("${count} new messages for ${userName}", id="2:3", name="Count"),
            make_raw("RECTANGLE", "Avatar", id="2:4"),
            make_raw("FRAME", "Secret Panel", id="2:5", visible=False),
            text_raw("Hidden copy", id="2:6", name="Hidden Text", visible=False),
        ],
    ))


@pytest.fixture
def document_raw(submit_button_raw):
    return {
        "name": "Demo",
        "document": {
            "id": "0:0",
            "type": "DOCUMENT",
            "name": "Document",
            "children": [
                {
                    "id": "0:1",
                    "type": "CANVAS",
                    "name": "Page 1",
                    "children": [
                        submit_button_raw,
                        make_raw("COMPONENT", "Nav Bar", id="3:1", children=[
                            make_raw("COMPONENT", "Nav Item", id="3:2"),
                        ]),
                        make_raw("FRAME", "Draft", id="4:1", visible=False, children=[
                            make_raw("COMPONENT", "Inside Draft", id="4:2"),
                        ]),
                        make_raw("GROUP", "Loose Group", id="5:1"),
                    ],
                }
            ],
        },
    }
