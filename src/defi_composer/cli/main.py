"""
Command line interface for DeFi Composer.

Usage:
    defi-composer kinds [--search QUERY] [--category CATEGORY]
    defi-composer demo [--name NAME] [--output FILE] [--no-connect]

Results go to stdout; log output goes to stderr.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from defi_composer.application.api import CompositionEngine
from defi_composer.application.settings import EngineSettings
from defi_composer.features.primitives.application.primitive_registry import get_primitive_registry
from defi_composer.utils.message import Log

DEMO_NAME = "Leveraged LP"


def _print_kinds(query: str, category: Optional[str]) -> int:
    templates = get_primitive_registry().search(query, category)
    if not templates:
        print("No primitive kinds match.")
        return 1

    for template in templates:
        print(f"{template.kind.value:<12} {template.name} [{template.category}]")
        print(f"    {template.description}")
        for definition in template.parameters:
            unit = f" {definition.unit}" if definition.unit else ""
            print(f"    - {definition.id} ({definition.type.value}) = {definition.default}{unit}")
        inputs = ", ".join(f"{s.label}:{s.resource_type}" for s in template.inputs)
        outputs = ", ".join(f"{s.label}:{s.resource_type}" for s in template.outputs)
        print(f"    in:  {inputs}")
        print(f"    out: {outputs}")
    return 0


def build_demo(engine: CompositionEngine, connect: bool = True) -> None:
    """Lending pool loan feeding the first leg of an AMM pool."""
    lending = engine.add_primitive("lendingPool", (100, 100))
    amm = engine.add_primitive("ammPool", (400, 100))
    if connect:
        connection = engine.add_connection(lending.get_output("Loan").id, amm.get_input("Token A").id)
        if connection is None:
            Log.warning(f"CLI: Demo connection refused: {engine.last_connection_attempt.message}")


def _run_demo(name: str, output: Optional[str], connect: bool, settings: EngineSettings) -> int:
    engine = CompositionEngine.create(name, settings=settings)
    build_demo(engine, connect=connect)

    result = engine.validate_composition()
    print(f"Validation: {result.summary()}")
    for issue in result.issues:
        print(f"  {issue}")

    code = engine.export_code()
    if output:
        Path(output).write_text(code, encoding="utf-8")
        print(f"Wrote {len(code)} chars to {output}")
    else:
        print()
        print(code, end="")
    return 0 if result.valid else 2


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="defi-composer",
        description="Compose DeFi primitives and generate Move modules.",
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ERROR or CRITICAL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    kinds = subparsers.add_parser("kinds", help="List the registered primitive kinds")
    kinds.add_argument("--search", default="", help="Match name, description or tags")
    kinds.add_argument("--category", default=None, help="Restrict to one category")

    demo = subparsers.add_parser("demo", help="Build, validate and export a sample composition")
    demo.add_argument("--name", default=DEMO_NAME, help="Composition name")
    demo.add_argument("--output", default=None, help="Write the Move module to this file")
    demo.add_argument(
        "--connect",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Wire the lending pool loan into the AMM pool",
    )

    args = parser.parse_args(argv)

    try:
        settings = EngineSettings.from_env()
    except ValueError as e:
        print(f"Invalid environment settings: {e}", file=sys.stderr)
        return 1
    if args.log_level:
        settings.log_level = args.log_level.upper()

    check = settings.validate()
    if not check.valid:
        for error in check.errors:
            print(f"Invalid settings: {error}", file=sys.stderr)
        return 1
    settings.apply_logging()

    if args.command == "kinds":
        return _print_kinds(args.search, args.category)
    return _run_demo(args.name, args.output, args.connect, settings)


if __name__ == "__main__":
    sys.exit(main())
