import pytest

from zschema_gen.diagrams.flowchart import gen_flowchart
from zschema_gen.mermaid_fmt import assert_mm_id, mermaid_block, mm_edge, mm_node, mm_text
from zschema_gen.parser import parse
from zschema_gen.resolve import resolve


def test_flowchart_with_error_node():
    schema = resolve(
        parse("definition user { } definition document { relation reader: user:* | group#member }")
    )
    assert gen_flowchart(schema, "t").splitlines() == [
        "---",
        "title: t",
        "---",
        "flowchart LR",
        '  b1["user"]',
        '  b2["document"]',
        '  r1(["reader"])',
        "  b2 --- r1",
        '  e1["definition group does not exist"]',
        '  r1 -->|"ALL"| b1',
        "  classDef notDrawn fill:#fdd,stroke:#c00,color:#900",
        "  class e1 notDrawn",
    ]


def test_flowchart_object_set_label_is_escaped():
    schema = resolve(
        parse("definition group { relation member: group | group#member }")
    )
    lines = gen_flowchart(schema, "t").splitlines()
    assert '  r1 -->|"group#35;member"| r1' in lines
    assert not any("classDef" in line for line in lines)


def test_flowchart_numbers_error_nodes_in_order():
    schema = resolve(parse("definition a { relation r: x | y } definition a { }"))
    lines = gen_flowchart(schema, "t").splitlines()
    assert '  e1["definition a is declared more than once"]' in lines
    assert '  e2["definition x does not exist"]' in lines
    assert '  e3["definition y does not exist"]' in lines
    assert lines[-1] == "  class e1,e2,e3 notDrawn"


def test_mm_text_escapes_mermaid_breakers():
    assert mm_text('a|b "c" <d>') == "a#124;b #quot;c#quot; #lt;d#gt;"
    assert mm_text("x#y") == "x#35;y"
    assert mm_text("  spaced\n out ") == "spaced out"


def test_mm_node_and_edge():
    assert mm_node("b1", "user") == '  b1["user"]'
    assert mm_node("r1", "reader", shape="stadium") == '  r1(["reader"])'
    assert mm_edge("a", "b") == "  a --> b"
    assert mm_edge("a", "b", arrow="---") == "  a --- b"
    with pytest.raises(ValueError):
        mm_node("1bad", "x")
    with pytest.raises(ValueError):
        mm_edge("a", "b", arrow="==>")


def test_assert_mm_id():
    assert assert_mm_id("r12") == "r12"
    with pytest.raises(ValueError):
        assert_mm_id("a-b")


def test_mermaid_block():
    assert mermaid_block("flowchart LR\n\n") == "```mermaid\nflowchart LR\n```\n"
