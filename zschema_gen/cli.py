from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import GenConfig, load_config
from .diagrams.registry import DiagramSpec, diagram_ids, get_diagram
from .io import read_schema_text
from .parser import SchemaSyntaxError, parse
from .resolve import resolve, split_issues
from .writer import write_md, write_text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zschema-gen",
        description=(
            "Generate a diagram (PlantUML Archimate or Mermaid) from a restricted "
            "Zanzibar-style schema."
        ),
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--schema", type=str, help="Schema text, given inline")
    source.add_argument("--fschema", type=Path, help="Path to a schema file")
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output file name without suffix; also used as the diagram title (default: out)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=diagram_ids(),
        default=None,
        help="Output format: archimate writes <out>.puml, mermaid writes <out>.md",
    )
    parser.add_argument("--scale", type=float, default=None, help="PlantUML scale directive")
    parser.add_argument("--dpi", type=int, default=None, help="PlantUML skinparam dpi")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Optional YAML config file; command-line flags take precedence",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help=(
            "Fail without writing output when the schema has semantic problems "
            "(duplicates, unknown references). Escalated errors always fail."
        ),
    )
    return parser


def _load_settings(args: argparse.Namespace) -> tuple[GenConfig, DiagramSpec, str]:
    try:
        cfg = load_config(
            args.config,
            overrides={
                "out": args.out,
                "format": args.format,
                "scale": args.scale,
                "dpi": args.dpi,
                "strict": args.strict,
            },
        )
        spec = get_diagram(cfg.format)
        text = args.schema if args.schema is not None else read_schema_text(args.fschema)
    except KeyError as e:
        print(f"error: {e.args[0]}", file=sys.stderr)
        raise SystemExit(2)
    except (OSError, TypeError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        raise SystemExit(1)
    return cfg, spec, text


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entrypoint."""
    args = _build_parser().parse_args(argv)
    cfg, spec, text = _load_settings(args)

    try:
        schema = parse(text)
    except SchemaSyntaxError as e:
        print(f"syntax error: {e}", file=sys.stderr)
        raise SystemExit(2)
    print("parsed schema is done.")

    resolved = resolve(schema, cfg.resolve)
    errors, warnings = split_issues(resolved.issues)
    for warning in warnings:
        print(f"warning: {warning}", file=sys.stderr)

    if errors or (cfg.strict and warnings):
        for error in errors:
            print(f"error: {error}", file=sys.stderr)
        raise SystemExit(2)

    title = Path(cfg.out).name
    out_path = Path(cfg.out + spec.suffix)
    diagram_code = spec.render(resolved, title, cfg.render)
    if spec.markdown:
        write_md(out_path, title, diagram_code)
    else:
        write_text(out_path, diagram_code)
    print(f"Generating {out_path} is done.")


if __name__ == "__main__":
    main()
