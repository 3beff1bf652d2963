from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .constants import (
    CONFIG_KEYS,
    DPI_DEFAULT,
    FORMAT_DEFAULT,
    OUT_DEFAULT,
    SCALE_DEFAULT,
)
from .io import load_yaml_mapping
from .resolve import ResolveConfig


@dataclass(frozen=True)
class RenderConfig:
    scale: float = SCALE_DEFAULT
    dpi: int = DPI_DEFAULT


@dataclass(frozen=True)
class GenConfig:
    """Effective settings for one CLI run (defaults < config file < flags)."""

    out: str = OUT_DEFAULT
    format: str = FORMAT_DEFAULT
    scale: float = SCALE_DEFAULT
    dpi: int = DPI_DEFAULT
    strict: bool = False
    ignore: frozenset[str] = field(default_factory=frozenset)
    escalate: frozenset[str] = field(default_factory=frozenset)

    @property
    def render(self) -> RenderConfig:
        return RenderConfig(scale=self.scale, dpi=self.dpi)

    @property
    def resolve(self) -> ResolveConfig:
        return ResolveConfig(ignore=self.ignore, escalate=self.escalate)


def _require_type(value: Any, expected: type | tuple[type, ...], *, key: str, path: Path) -> Any:
    # bool is an int subclass; never accept it for numeric settings.
    if isinstance(value, bool) and bool not in (
        expected if isinstance(expected, tuple) else (expected,)
    ):
        raise TypeError(f"{path}: {key!r} must not be a boolean")
    if not isinstance(value, expected):
        raise TypeError(
            f"{path}: {key!r} has type {type(value).__name__}, expected "
            f"{getattr(expected, '__name__', expected)}"
        )
    return value


def _code_set(value: Any, *, key: str, path: Path) -> frozenset[str]:
    _require_type(value, list, key=key, path=path)
    for item in value:
        if not isinstance(item, str):
            raise TypeError(f"{path}: {key!r} must be a list of diagnostic codes")
    return frozenset(value)


def config_from_mapping(data: dict[str, Any], *, path: Path) -> dict[str, Any]:
    """Validate a config mapping and return GenConfig keyword overrides."""
    unknown = sorted(set(data) - set(CONFIG_KEYS))
    if unknown:
        raise ValueError(f"{path}: unknown config key(s): {', '.join(unknown)}")

    out: dict[str, Any] = {}
    if "out" in data:
        out["out"] = _require_type(data["out"], str, key="out", path=path)
    if "format" in data:
        out["format"] = _require_type(data["format"], str, key="format", path=path)
    if "scale" in data:
        out["scale"] = float(
            _require_type(data["scale"], (int, float), key="scale", path=path)
        )
    if "dpi" in data:
        out["dpi"] = _require_type(data["dpi"], int, key="dpi", path=path)
    if "strict" in data:
        out["strict"] = _require_type(data["strict"], bool, key="strict", path=path)
    if "ignore" in data:
        out["ignore"] = _code_set(data["ignore"], key="ignore", path=path)
    if "escalate" in data:
        out["escalate"] = _code_set(data["escalate"], key="escalate", path=path)
    return out


def load_config(
    path: Optional[Path] = None, overrides: Optional[dict[str, Any]] = None
) -> GenConfig:
    """Build the effective config.

    Values from the YAML file at `path` replace the defaults; non-None
    `overrides` (typically CLI flags) replace both.
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(config_from_mapping(load_yaml_mapping(path), path=path))
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    return GenConfig(**values)
