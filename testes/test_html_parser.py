import pytest
pytest.importorskip("bs4")

from pydantic import ValidationError

from rich_text_migrator.models.nodes import ElementNode, TextNode
from rich_text_migrator.parsers.html_parser import parse_html


def test_empty_input_has_no_nodes():
    assert parse_html("") == []
    assert parse_html("   \n ") == []


def test_fragment_siblings_and_nesting():
    nodes = parse_html('<p>Hello <b>world</b></p>tail<img src="a.png">')
    assert [type(n) for n in nodes] == [ElementNode, TextNode, ElementNode]
    p, tail, img = nodes
    assert p.tag_name == "p"
    assert p.children[0] == TextNode(content="Hello ")
    assert p.children[1].tag_name == "b"
    assert p.children[1].children == (TextNode(content="world"),)
    assert tail.content == "tail"
    assert img.attributes == {"src": "a.png"}
    assert img.children == ()


def test_attributes_keep_source_order_and_are_strings():
    (a,) = parse_html('<a title="t" class="one two" href="x">t</a>')
    assert list(a.attributes) == ["title", "class", "href"]
    assert a.attributes["class"] == "one two"


def test_text_keeps_markup_escaping():
    (p,) = parse_html("<p>Fish &amp; chips &lt;3</p>")
    assert p.children[0].content == "Fish &amp; chips &lt;3"


def test_comments_scripts_and_styles_are_dropped():
    nodes = parse_html("<!-- note --><script>x()</script><style>p{}</style><p>kept</p>")
    assert len(nodes) == 1
    assert nodes[0].tag_name == "p"


def test_nodes_are_immutable():
    (p,) = parse_html("<p>x</p>")
    with pytest.raises(ValidationError):
        p.tag_name = "div"


def test_element_node_accepts_camel_case_alias():
    node = ElementNode(tagName="span", children=(TextNode(content="hi"),))
    assert node.tag_name == "span"
    assert node.attributes == {}
