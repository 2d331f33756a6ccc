"""Tests for themes and label formatting."""

import pytest

from c4viz.core.models import ElementKind, Theme, Usage
from c4viz.visualization.styles import THEMES, LabelFormatter, get_theme, wrap_text


@pytest.fixture
def formatter():
    return LabelFormatter(get_theme(Theme.LIGHT))


def test_wrap_at_twenty_columns():
    """Lines break at whitespace before exceeding the width."""
    assert wrap_text("a long description that needs wrapping") == (
        "a long description<br />\nthat needs wrapping"
    )


def test_wrap_keeps_long_words_whole():
    """Words longer than the width are not split."""
    word = "supercalifragilisticexpialidocious"
    assert wrap_text(f"{word} ok") == f"{word}<br />\nok"


def test_wrap_custom_width():
    assert wrap_text("one two three", width=7) == "one two<br />\nthree"


def test_wrap_preserves_line_breaks():
    assert wrap_text("line one\nline two") == "line one<br />\nline two"


def test_wrap_escapes_markup():
    assert wrap_text("R&D <team>") == "R&amp;D &lt;team&gt;"


def test_wrap_empty():
    assert wrap_text("") == ""


def test_light_theme_palette():
    """The light theme keeps the classic ink and container gradient."""
    theme = THEMES[Theme.LIGHT]

    assert theme.font_color == "#263238"
    assert theme.line_color == "#263238"
    assert theme.font_name == "helvetica"
    assert theme.container_fill == "#ECEFF1:#90A4AE"
    assert theme.gradient_angle == 270


def test_every_theme_defined():
    assert set(THEMES) == set(Theme)
    assert get_theme("dark") is THEMES[Theme.DARK]


def test_container_label_with_type(formatter):
    label = formatter.element_label("Storefront", ElementKind.CONTAINER, "Pages", "Django")

    assert label.startswith('<<table border="0" cellborder="0" cellspacing="0">')
    assert label.endswith("</table>>")
    assert '<font point-size="12">Storefront</font>' in label
    assert '<font point-size="8">[Container: Django]</font>' in label
    assert "<tr><td>Pages</td></tr>" in label


def test_container_label_without_type(formatter):
    label = formatter.element_label("DB", ElementKind.CONTAINER)

    assert "[Container]" in label


@pytest.mark.parametrize(
    "kind, tag",
    [
        (ElementKind.INTERNAL_SYSTEM, "[Internal System]"),
        (ElementKind.EXTERNAL_SYSTEM, "[External System]"),
        (ElementKind.INTERNAL_USER, "[Internal User]"),
        (ElementKind.EXTERNAL_USER, "[External User]"),
    ],
)
def test_kind_tags(formatter, kind, tag):
    assert tag in formatter.element_label("Name", kind, "Description")


def test_usage_label_segments(formatter):
    """Each usage adds its purpose row and, when typed, a type row."""
    label = formatter.usage_label(
        [Usage("db", "reads orders", "SQL"), Usage("db", "archives old orders")],
    )

    assert "<tr><td>reads orders</td></tr>" in label
    assert '<tr><td><font point-size="8">[SQL]</font></td></tr>' in label
    assert "<tr><td>archives old orders</td></tr>" in label
    assert label.index("reads orders") < label.index("[SQL]") < label.index("archives")


def test_usage_label_wraps_purpose(formatter):
    label = formatter.usage_label([Usage("db", "reads and writes customer orders")])

    assert "reads and writes<br />\ncustomer orders" in label


def test_container_node_attributes(formatter):
    attributes = formatter.node_attributes(ElementKind.CONTAINER)

    assert attributes["style"] == "rounded,filled"
    assert attributes["shape"] == "box"
    assert attributes["fillcolor"] == "#ECEFF1:#90A4AE"
    assert attributes["gradientangle"] == 270
    assert attributes["fontname"] == "helvetica"
    assert attributes["fontsize"] == "10"


@pytest.mark.parametrize(
    "kind, shape, style",
    [
        (ElementKind.INTERNAL_SYSTEM, "box", "rounded"),
        (ElementKind.EXTERNAL_SYSTEM, "box", "rounded,dashed"),
        (ElementKind.INTERNAL_USER, "underline", None),
        (ElementKind.EXTERNAL_USER, "underline", "dashed"),
    ],
)
def test_node_shapes(formatter, kind, shape, style):
    attributes = formatter.node_attributes(kind)

    assert attributes["shape"] == shape
    assert attributes.get("style") == style
    assert "fillcolor" not in attributes


def test_cluster_and_edge_attributes(formatter):
    assert formatter.cluster_attributes()["style"] == "rounded"
    assert formatter.cluster_attributes()["color"] == "#263238"
    assert formatter.edge_attributes() == {
        "fontsize": "10",
        "fontcolor": "#263238",
        "fontname": "helvetica",
        "color": "#263238",
    }
