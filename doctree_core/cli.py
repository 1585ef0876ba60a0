"""CLI building an API entity forest from extracted comment files."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from doctree_core.exceptions import ConfigurationError, SourceParserError
from doctree_core.logging import setup_logging
from doctree_core.output import JsonRenderer
from doctree_core.pipeline import BuildResult, build_files
from doctree_core.settings import BuildConfig, SortPolicy
from doctree_core.sources import JsonCommentParser


def _parse_order(value: str) -> SortPolicy | tuple[str, ...]:
    """Accept a policy name or a comma-separated list of names/paths."""
    if value in {policy.value for policy in SortPolicy}:
        return SortPolicy(value)
    return tuple(item.strip() for item in value.split(",") if item.strip())


def _build_config(args: argparse.Namespace) -> BuildConfig:
    """Layer command-line options over environment-derived settings."""
    overrides: dict[str, Any] = {}
    if args.access:
        overrides["access"] = tuple(level.strip() for level in args.access.split(",") if level.strip())
    if args.order:
        overrides["order"] = _parse_order(args.order)
    if args.infer_private:
        overrides["infer_private"] = args.infer_private
    if args.output_source_code:
        overrides["output_source_code"] = True
    try:
        return BuildConfig(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def _print_diagnostics(result: BuildResult) -> None:
    for diagnostic in result.diagnostics:
        name = f" {diagnostic.name}" if diagnostic.name else ""
        print(f"{diagnostic.file}:{diagnostic.line}{name}: {diagnostic.kind}: {diagnostic.message}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Entry point: read RawComment JSON files, write the entity forest as JSON."""
    parser = argparse.ArgumentParser(description="Build a documented API tree from extracted comments")
    parser.add_argument("inputs", nargs="+", type=Path, help="JSON files holding RawComment arrays")
    parser.add_argument("-o", "--output", type=Path, help="Write the forest here instead of stdout")
    parser.add_argument("--access", help="Comma-separated access levels to keep (public,protected,private,undefined)")
    parser.add_argument("--order", help="source, alpha, kind, or a comma-separated list of names/paths")
    parser.add_argument("--infer-private", help="Regex marking undocumented-access names as private, e.g. '^_'")
    parser.add_argument("--output-source-code", action="store_true", help="Attach code snippets to entities")
    parser.add_argument("--diagnostics", action="store_true", help="Print diagnostics to stderr")
    parser.add_argument("--log-level", help="Override the log level (DEBUG, INFO, ...)")

    args = parser.parse_args(argv)
    if args.log_level:
        setup_logging(level=args.log_level.upper())

    try:
        config = _build_config(args)
    except ConfigurationError as exc:
        print(f"FAIL: invalid configuration: {exc}", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(build_files(args.inputs, JsonCommentParser(), config))
    except SourceParserError as exc:
        print(f"FAIL: {exc}", file=sys.stderr)
        return 1

    content = JsonRenderer().render(result.roots, config) + "\n"
    if args.output:
        args.output.write_text(content, encoding="utf-8")
        print(f"  wrote {args.output} ({len(result.roots)} root entities)")
    else:
        sys.stdout.write(content)

    if args.diagnostics:
        _print_diagnostics(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
