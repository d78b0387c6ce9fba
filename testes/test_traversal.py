import asyncio
import itertools

import pytest

from rich_text_migrator.models.nodes import ElementNode, TextNode
from rich_text_migrator.parsers.context import TransformContext
from rich_text_migrator.parsers.html_parser import parse_html
from rich_text_migrator.parsers.transformers import build_registry, default_transformer
from rich_text_migrator.parsers.traversal import convert_html, nodes_to_html, traverse
from rich_text_migrator.utils.errors import TransformerError


def run(html, registry=None, context=None):
    return convert_html(html, registry if registry is not None else {}, context or TransformContext())


def test_text_node_is_returned_verbatim():
    assert asyncio.run(traverse(TextNode(content="a &amp; b"), {}, TransformContext())) == "a &amp; b"


def test_default_transformer_round_trip():
    assert run('<span title="x">hi</span>') == '<span title="x">hi</span>'


def test_unrecognized_attribute_dropped():
    assert run('<a href="x" onclick="y">t</a>') == '<a href="x">t</a>'


def test_nested_markup_is_mirrored():
    html = '<ul><li><a href="/a" target="_blank">one</a></li><li>two</li></ul>'
    assert run(html) == html


def test_empty_fragment():
    assert asyncio.run(nodes_to_html([], {}, TransformContext())) == ""


def test_builtin_rewrites():
    registry = build_registry(upload_assets=False)
    assert run("<p>a <i>b</i> <b>c</b></p>", registry) == "<p>a <em>b</em> <strong>c</strong></p>"


def test_siblings_keep_document_order_when_completing_in_reverse():
    completed = []

    async def slow(node, children, context):
        delay = float(node.attributes["data-id"])
        await asyncio.sleep(delay)
        completed.append(children)
        return f"[{children}]"

    html = "".join(f'<x data-id="{d}">{n}</x>' for n, d in enumerate(("0.05", "0.03", "0.01", "0")))
    assert run(html, {"x": slow}) == "[0][1][2][3]"
    assert completed == ["3", "2", "1", "0"]


def test_parent_runs_after_every_descendant():
    counter = itertools.count()
    calls = {}

    async def record(node, children, context):
        await asyncio.sleep(0)
        calls[node.attributes["data-id"]] = next(counter)
        return children

    registry = {"default": record}
    html = '<div data-id="root"><p data-id="a"><b data-id="a1">x</b></p><p data-id="b"><i data-id="b1">y</i><i data-id="b2">z</i></p></div>'
    assert run(html, registry) == "xyz"
    assert calls["a1"] < calls["a"]
    assert calls["b1"] < calls["b"] and calls["b2"] < calls["b"]
    assert max(v for k, v in calls.items() if k != "root") < calls["root"]


def test_each_transformer_called_once_with_joined_children():
    seen = []

    async def spy(node, children, context):
        seen.append((node.tag_name, children))
        return await default_transformer(node, children, context)

    run("<p>a<em>b</em>c</p>", {"p": spy, "em": spy})
    assert seen == [("em", "b"), ("p", "a<em>b</em>c")]


def test_default_key_overrides_fallback():
    async def upper(node, children, context):
        return children.upper()

    assert run("<div><span>hi</span></div>", {"default": upper}) == "HI"


def test_context_is_shared_by_reference():
    context = TransformContext(item={"Name": "doc"})
    contexts = []

    async def grab(node, children, ctx):
        contexts.append(ctx)
        return children

    run("<p><span>a</span><span>b</span></p>", {"p": grab, "span": grab}, context)
    assert all(c is context for c in contexts) and len(contexts) == 3


def test_failing_transformer_aborts_whole_conversion():
    async def boom(node, children, context):
        raise TransformerError("nope")

    with pytest.raises(TransformerError):
        run("<p>fine</p><p><q>bad</q></p>", {"q": boom})


def test_registry_is_read_only():
    registry = build_registry()
    with pytest.raises(TypeError):
        registry["p"] = default_transformer


def test_traverse_accepts_hand_built_tree():
    tree = ElementNode(
        tag_name="p",
        attributes={"class": "lead", "title": "T"},
        children=(TextNode(content="hi "), ElementNode(tag_name="i", children=(TextNode(content="there"),))),
    )
    out = asyncio.run(traverse(tree, build_registry(upload_assets=False), TransformContext()))
    assert out == '<p title="T">hi <em>there</em></p>'


def test_parse_and_convert_agree():
    html = "<p>x</p><p>y</p>"
    nodes = parse_html(html)
    assert asyncio.run(nodes_to_html(nodes, {}, TransformContext())) == run(html)
