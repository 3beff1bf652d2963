from pathlib import Path

import pytest

from zschema_gen.config import RenderConfig
from zschema_gen.diagrams.archimate import gen_archimate
from zschema_gen.diagrams.registry import generate, get_diagram
from zschema_gen.parser import parse
from zschema_gen.resolve import resolve

FIXTURE_DIR = Path(__file__).resolve().parents[1] / "fixtures" / "schemas"

HEADER = [
    "@startuml t",
    "!include <archimate/Archimate>",
    "scale 1.0",
    "skinparam dpi 96",
]


def render_lines(text: str, cfg: RenderConfig = RenderConfig()) -> list[str]:
    out = gen_archimate(resolve(parse(text)), "t", cfg)
    assert out.endswith("@enduml\n")
    lines = out.splitlines()
    assert lines[:4] == HEADER[:2] + [f"scale {cfg.scale}", f"skinparam dpi {cfg.dpi}"]
    return lines[4:-1]


def test_empty_schema_is_header_and_footer_only():
    assert render_lines("") == []


def test_golden_document_schema():
    text = (FIXTURE_DIR / "document.zed").read_text(encoding="utf-8")
    expected = (FIXTURE_DIR / "document.puml").read_text(encoding="utf-8")
    assert gen_archimate(resolve(parse(text)), "document", RenderConfig()) == expected


def test_output_is_deterministic():
    text = (FIXTURE_DIR / "document.zed").read_text(encoding="utf-8")
    first = generate(resolve(parse(text)), "document")
    second = generate(resolve(parse(text)), "document")
    assert first == second


def test_resolve_and_generate_twice_on_same_ast():
    schema = parse((FIXTURE_DIR / "broken.zed").read_text(encoding="utf-8"))
    first = generate(resolve(schema), "broken")
    second = generate(resolve(schema), "broken")
    assert first == second


def test_wildcard_renders_all_marker():
    lines = render_lines("definition user { } definition document { relation reader: user:* }")
    assert lines == [
        'Business_Object(b1,"user")',
        'Business_Object(b2,"document")',
        'Business_Object(r1,"reader") <<relation>>',
        "Rel_Association(b2,r1)",
        'Rel_Access_w(r1,b1,"ALL")',
    ]


def test_render_config_controls_header():
    lines = gen_archimate(resolve(parse("")), "t", RenderConfig(scale=0.5, dpi=300)).splitlines()
    assert lines == [
        "@startuml t",
        "!include <archimate/Archimate>",
        "scale 0.5",
        "skinparam dpi 300",
        "@enduml",
    ]


def test_broken_schema_renders_error_markers():
    text = (FIXTURE_DIR / "broken.zed").read_text(encoding="utf-8")
    assert render_lines(text) == [
        'Business_Object(b1,"user")',
        'rectangle "definition user is declared more than once" #red',
        'Business_Object(b3,"document")',
        'Business_Object(r2,"reader") <<relation>>',
        "Rel_Association(b3,r2)",
        "Rel_Access_w(r2,b1)",
        'rectangle "definition team does not exist" #red',
        'rectangle "relation reader is duplicated in definition document" #red',
        'rectangle "definition group does not exist" #red',
        'rectangle "user#owner in definition document : relation owner does not exist in user" #red',
        'Rel_Access_w(r2,b1,"ALL")',
        'rectangle "wildcard user:* is declared more than once in relation reader of definition document" #red',
    ]


def test_duplicate_plain_reference_names_the_reference():
    lines = render_lines("definition user { } definition doc { relation r: user | user }")
    assert lines[-2:] == [
        "Rel_Access_w(r1,b1)",
        'rectangle "user is declared more than once in relation r of definition doc" #red',
    ]


def test_duplicate_object_set_reference():
    lines = render_lines(
        "definition user { } "
        "definition document { relation reader: user | group#member | group#member relation member: user } "
        "definition group { relation member: user }"
    )
    assert lines[-2:] == [
        'Rel_Access_w(r3,r1,"group#member")',
        'rectangle "group#member is declared more than once in relation reader of definition document" #red',
    ]


def test_reference_kinds_are_grouped_in_three_passes():
    lines = render_lines(
        "definition a { relation x: a:* | b#y | a } definition b { relation y: b:* | a#x | b }"
    )
    assert lines == [
        'Business_Object(b1,"a")',
        'Business_Object(b2,"b")',
        'Business_Object(r1,"x") <<relation>>',
        "Rel_Association(b1,r1)",
        "Rel_Access_w(r1,b1)",
        'Business_Object(r2,"y") <<relation>>',
        "Rel_Association(b2,r2)",
        "Rel_Access_w(r2,b2)",
        'Rel_Access_w(r2,r1,"b#y")',
        'Rel_Access_w(r1,r2,"a#x")',
        'Rel_Access_w(r1,b1,"ALL")',
        'Rel_Access_w(r2,b2,"ALL")',
    ]


def test_registry_rejects_unknown_format():
    with pytest.raises(KeyError):
        get_diagram("graphviz")
