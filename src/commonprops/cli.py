"""commonprops CLI: intersect schema documents from the command line."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Optional


def main():
    """Main CLI entry point for commonprops commands."""
    try:
        commonprops_version = get_version("commonprops")
    except PackageNotFoundError:
        commonprops_version = "dev"

    parser = argparse.ArgumentParser(
        prog="commonprops",
        description="commonprops: common fields across record schemas (strict or upcast)"
    )
    parser.add_argument("--version", action="version", version=f"commonprops {commonprops_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output (fold steps) to stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # intersect command
    intersect_parser = subparsers.add_parser(
        "intersect",
        help="Intersect schema documents",
        parents=[parent_parser]
    )
    intersect_parser.add_argument(
        "schemas",
        type=Path,
        nargs="*",
        help="Paths to schema documents, folded left to right"
    )
    intersect_parser.add_argument(
        "--policy",
        choices=["strict", "upcast"],
        default=None,
        help="Compatibility policy (defaults to $COMMONPROPS_POLICY or 'upcast')"
    )
    intersect_parser.add_argument(
        "--default",
        type=Path,
        default=None,
        help="Schema document returned when no schemas are given"
    )
    intersect_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write intersection.json here instead of printing to stdout"
    )
    intersect_parser.add_argument(
        "--fail-on-drop",
        action="store_true",
        default=None,
        help="Exit with code 2 if any input field was dropped"
    )

    # classify command
    classify_parser = subparsers.add_parser(
        "classify",
        help="Classify a single descriptor given as JSON",
        parents=[parent_parser]
    )
    classify_parser.add_argument(
        "descriptor",
        help='Descriptor JSON, e.g. \'{"kind": "string_literal", "value": "cat"}\''
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    from .config import ConfigError, Settings

    try:
        settings = Settings.from_env().override(
            policy=getattr(args, "policy", None),
            log_level="DEBUG" if args.verbose else None,
            fail_on_drop=getattr(args, "fail_on_drop", None),
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "intersect":
        # Lazy import: only import the kernel when a command needs it
        from ._internal.canonical_json import canonical_dumps, pretty_dumps
        from ._internal.io.schema_file import SchemaDocumentError
        from .api import intersect

        try:
            result = intersect(args.schemas, policy=settings.policy, default=args.default)
        except SchemaDocumentError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        report = result.model_dump(mode="json")
        output_dir: Optional[Path] = args.output_dir
        if output_dir is not None:
            output_dir = output_dir.resolve()
            output_dir.mkdir(parents=True, exist_ok=True)
            report_out = output_dir / "intersection.json"
            report_out.write_text(canonical_dumps(report) + "\n", encoding="utf-8")
            if not args.quiet:
                print("[OK] Intersection complete")
                print(f"  Report: {report_out}")
                print(f"  Policy: {result.policy.value}")
                print(f"  Kept: {len(result.kept)}")
                print(f"  Dropped: {len(result.dropped)}")
        elif not args.quiet:
            print(pretty_dumps(report))

        if settings.fail_on_drop and result.dropped:
            sys.exit(2)

    elif args.command == "classify":
        from pydantic import ValidationError

        from .api import classify_descriptor

        try:
            data = json.loads(args.descriptor)
            if not isinstance(data, dict):
                raise ValueError("descriptor must be a JSON object")
            result = classify_descriptor(data)
        except (ValueError, ValidationError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if not args.quiet:
            print(f"Descriptor: {result.descriptor}")
            print(f"  Upcastable: {'yes' if result.upcastable else 'no'}")
            print(f"  Base kind: {result.base_kind or '-'}")


if __name__ == "__main__":
    main()
