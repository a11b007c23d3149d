import pytest

from pyvue import Component, DataContext, TemplateConfig, render
from pyvue.compiler.interpolation import has_placeholders, interpolate
from pyvue.compiler.markup import parse_node, render_children
from pyvue.compiler.template import execute_text
from pyvue.exceptions import InterpolationError


def test_substitutes_fields():
    assert interpolate("Hello {{ Name }}!", {"Name": "pyvue"}) == "Hello pyvue!"


def test_attribute_access_on_objects():
    class User:
        Name = "ada"

    assert interpolate("{{ User.Name }}", {"User": User()}) == "ada"


def test_text_without_placeholders_is_unchanged():
    assert interpolate("  plain {text}\n", {}) == "  plain {text}\n"
    assert not has_placeholders("{ single }")


def test_missing_name_renders_empty():
    assert interpolate("[{{ Missing }}]", {}) == "[]"


def test_missing_name_is_an_error_when_strict():
    with pytest.raises(InterpolationError) as exc:
        interpolate("[{{ Missing }}]", {}, strict=True)
    assert exc.value.text == "[{{ Missing }}]"


def test_malformed_placeholder():
    with pytest.raises(InterpolationError):
        interpolate("{{ Name ", {"Name": "x"})


def test_evaluation_errors_are_wrapped():
    with pytest.raises(InterpolationError):
        interpolate("{{ Count / 0 }}", {"Count": 1})


def test_trailing_newline_is_kept():
    assert interpolate("{{ A }}\n", {"A": "a"}) == "a\n"


def test_values_are_escaped_once():
    comp = Component("<p>{{ Html }}</p>", data={"Html": "<b>&</b>"})
    assert render(comp) == "<p>&lt;b&gt;&amp;&lt;/b&gt;</p>"


def test_whitespace_only_text_is_untouched():
    root = parse_node("<p>  </p>")
    execute_text(root, DataContext({}))
    assert render_children(root) == "<p>  </p>"


def test_text_pass_is_idempotent_without_braces_in_values():
    root = parse_node("<p>{{ A }} and {{ B }}</p>")
    data = DataContext({"A": "one", "B": "two"})
    execute_text(root, data)
    once = render_children(root)
    execute_text(root, data)
    assert render_children(root) == once == "<p>one and two</p>"


def test_attributes_are_not_interpolated():
    comp = Component('<a title="{{ Name }}">{{ Name }}</a>', data={"Name": "x"})
    assert render(comp) == '<a title="{{ Name }}">x</a>'


def test_strict_interpolation_config():
    comp = Component(
        "<p>{{ Missing }}</p>", config=TemplateConfig(strict_interpolation=True)
    )
    with pytest.raises(InterpolationError):
        render(comp)


def test_booleans_and_none_render_like_bound_attributes():
    values = {"On": True, "Off": False, "Nothing": None}
    assert interpolate("{{ On }}/{{ Off }}/{{ Nothing }}", values) == "true/false/"
    comp = Component(
        '<p v-bind:data-flag="Flag">{{ Flag }}</p>', data={"Flag": True}
    )
    assert render(comp) == '<p data-flag="true">true</p>'
