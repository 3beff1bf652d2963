from pathlib import Path

import pytest

from zschema_gen.config import GenConfig, RenderConfig, load_config
from zschema_gen.io import load_yaml_mapping, read_schema_text
from zschema_gen.resolve import ResolveConfig


def write(tmp_path: Path, name: str, body: str) -> Path:
    path = tmp_path / name
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults():
    cfg = load_config()
    assert cfg == GenConfig()
    assert cfg.out == "out"
    assert cfg.format == "archimate"
    assert cfg.render == RenderConfig(scale=1.0, dpi=96)
    assert cfg.resolve == ResolveConfig()


def test_yaml_values_replace_defaults(tmp_path):
    path = write(
        tmp_path,
        "zschema.yaml",
        "out: diagrams/acl\n"
        "format: mermaid\n"
        "scale: 2\n"
        "dpi: 150\n"
        "strict: true\n"
        "ignore: [W_DUPLICATE_OBJECT_REF]\n"
        "escalate:\n"
        "  - W_UNKNOWN_DEFINITION\n",
    )
    cfg = load_config(path)
    assert cfg.out == "diagrams/acl"
    assert cfg.format == "mermaid"
    assert cfg.scale == 2.0
    assert isinstance(cfg.scale, float)
    assert cfg.dpi == 150
    assert cfg.strict is True
    assert cfg.resolve == ResolveConfig(
        ignore=frozenset({"W_DUPLICATE_OBJECT_REF"}),
        escalate=frozenset({"W_UNKNOWN_DEFINITION"}),
    )


def test_overrides_win_and_none_is_skipped(tmp_path):
    path = write(tmp_path, "zschema.yaml", "out: from_file\ndpi: 150\n")
    cfg = load_config(path, overrides={"out": "from_flag", "dpi": None})
    assert cfg.out == "from_flag"
    assert cfg.dpi == 150


def test_empty_yaml_is_empty_mapping(tmp_path):
    path = write(tmp_path, "empty.yaml", "")
    assert load_yaml_mapping(path) == {}
    assert load_config(path) == GenConfig()


def test_unknown_key_is_rejected(tmp_path):
    path = write(tmp_path, "zschema.yaml", "colour: red\n")
    with pytest.raises(ValueError, match="unknown config key"):
        load_config(path)


@pytest.mark.parametrize(
    "body",
    [
        "dpi: high\n",
        "dpi: true\n",
        "scale: [1]\n",
        "strict: 1\n",
        "ignore: W_X\n",
        "escalate: [1, 2]\n",
    ],
)
def test_wrong_types_are_rejected(tmp_path, body):
    path = write(tmp_path, "zschema.yaml", body)
    with pytest.raises(TypeError):
        load_config(path)


def test_top_level_must_be_mapping(tmp_path):
    path = write(tmp_path, "zschema.yaml", "- out\n")
    with pytest.raises(TypeError, match="must be a mapping"):
        load_yaml_mapping(path)


def test_invalid_yaml_is_value_error(tmp_path):
    path = write(tmp_path, "zschema.yaml", "out: [unclosed\n")
    with pytest.raises(ValueError, match="Failed to parse YAML"):
        load_yaml_mapping(path)


def test_missing_files(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml_mapping(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        read_schema_text(tmp_path / "nope.zed")


def test_read_schema_text(tmp_path):
    path = write(tmp_path, "s.zed", "definition user { }\n")
    assert read_schema_text(path) == "definition user { }\n"
