import unittest

from pyvue import Component, DataContext, props, render
from pyvue.compiler.markup import parse_node
from pyvue.compiler.template import StructuralChange, Template
from pyvue.core.props import PropSpec


@props
class CardProps:
    Title: str
    Count: int = 0


def card():
    return Component(
        '<section class="card"><h2>{{ Title }}</h2><p>{{ Count }}</p></section>',
        props=CardProps,
        name="card",
    )


class TestSubcomponents(unittest.TestCase):
    def test_placeholder_is_replaced_by_output(self):
        parent = Component(
            '<main><card v-bind:title="Heading"></card><footer>end</footer></main>',
            data={"Heading": "Hello"},
            components={"card": card()},
        )
        self.assertEqual(
            render(parent),
            '<main><section class="card"><h2>Hello</h2><p>0</p></section>'
            "<footer>end</footer></main>",
        )

    def test_bound_prop_is_not_emitted_and_stored_once(self):
        parent = Component("", components={"card": card()})
        root = parse_node('<card v-bind:title="Heading" v-bind:class="Cls"></card>')
        placeholder = root.first_child
        sub = parent.new_sub(placeholder.tag)

        change = Template(parent).execute_attrs(
            placeholder, sub, DataContext({"Heading": "Hi", "Cls": "big"})
        )

        self.assertIsNone(change)
        self.assertEqual(sub.props, {"Title": "Hi"})
        self.assertNotIn("title", [a.key for a in placeholder.attrs])
        # non-prop bindings land on the placeholder, which is discarded
        self.assertEqual(placeholder.get("class"), "big")

    def test_non_prop_bindings_do_not_survive(self):
        parent = Component(
            '<card v-bind:title="Heading" v-bind:class="Cls"></card>',
            data={"Heading": "Hi", "Cls": "big"},
            components={"card": card()},
        )
        html = render(parent)
        self.assertNotIn("big", html)
        self.assertEqual(html.count('class="card"'), 1)

    def test_prop_defaults_and_overrides(self):
        parent = Component(
            '<card v-bind:title="A"></card><card v-bind:title="B" v-bind:count="N"></card>',
            data={"A": "first", "B": "second", "N": 5},
            components={"card": card()},
        )
        html = render(parent)
        self.assertIn("<h2>first</h2><p>0</p>", html)
        self.assertIn("<h2>second</h2><p>5</p>", html)

    def test_instances_do_not_share_props(self):
        definition = card()
        parent = Component("", components={"card": definition})
        first = parent.new_sub("card")
        first.props["Title"] = "x"
        self.assertEqual(parent.new_sub("CARD").props, {})
        self.assertEqual(definition.props, {})

    def test_unregistered_tags_are_plain_elements(self):
        parent = Component('<card v-bind:title="T">x</card>', data={"T": "t"})
        self.assertEqual(render(parent), '<card title="t">x</card>')

    def test_subcomponent_in_loop(self):
        parent = Component(
            '<ul><card v-for="Name in Names" v-bind:title="Name"></card></ul>',
            data={"Names": ["a", "b"]},
            components={"card": card()},
        )
        html = render(parent)
        self.assertEqual(html.count("<section"), 2)
        self.assertIn("<h2>a</h2>", html)
        self.assertIn("<h2>b</h2>", html)

    def test_structural_directive_on_placeholder(self):
        parent = Component(
            '<card v-if="Show" v-bind:title="T"></card><p>after</p>',
            data={"Show": False, "T": "t"},
            components={"card": card()},
        )
        self.assertEqual(render(parent), "<p>after</p>")

    def test_nested_subcomponents(self):
        badge = Component("<b>{{ Label }}</b>", props=["Label"])
        panel = Component(
            '<div class="panel"><badge v-bind:label="Caption"></badge></div>',
            props=["Caption"],
            components={"badge": badge},
        )
        parent = Component(
            '<panel v-bind:caption="Text"></panel>',
            data={"Text": "new"},
            components={"panel": panel},
        )
        self.assertEqual(render(parent), '<div class="panel"><b>new</b></div>')

    def test_subcomponent_own_data(self):
        counter = Component(
            "<span>{{ Prefix }}{{ Value }}</span>",
            data=lambda: {"Prefix": "#"},
            props=["Value"],
        )
        parent = Component(
            '<counter v-bind:value="N"></counter>',
            data={"N": 3},
            components={"counter": counter},
        )
        self.assertEqual(render(parent), "<span>#3</span>")


def test_expansion_resumes_after_placeholder():
    parent = Component("", components={"card": card()})
    root = parse_node('<card v-bind:title="T"></card><i>next</i>')
    placeholder = root.first_child
    data = DataContext({"T": "t"})
    template = Template(parent)

    next_node = template.execute_element(placeholder, data)

    assert next_node.tag == "i"
    assert [n.tag for n in root.children] == ["section", "i"]
    assert placeholder.parent is None


def test_prop_spec_matches_case_insensitively():
    declared = PropSpec(["ItemCount", "title"])
    assert declared.resolve("itemcount") == "ItemCount"
    assert declared.resolve("title") == "Title"
    assert "missing" not in declared
    assert list(declared) == ["ItemCount", "Title"]


def test_prop_spec_requires_decorated_class():
    class Plain:
        Title: str

    try:
        PropSpec(Plain)
    except TypeError as e:
        assert "@props" in str(e)
    else:
        raise AssertionError("expected TypeError")


def test_structural_change_is_a_value():
    assert StructuralChange(None) == StructuralChange(None)
