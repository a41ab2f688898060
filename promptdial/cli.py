"""CLI entrypoints for promptdial commands."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from .artifacts import ArtifactStoreError, open_store, store_collaborators
from .compiler import compile_prompt
from .config import ConfigError, PromptDialConfig, load_config
from .logging import configure_logging
from .models import MAX_DIAL, MIN_DIAL, CompileInput
from .service import run_service
from .templates import DEFAULT_REGISTRY, UnknownTemplateError
from .validators import compile_output_to_dict, validate_and_repair_spec


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=".",
        help="Directory containing .promptdial.yml, or the file itself (defaults to current directory).",
    )


def _dial(value: str) -> int:
    dial = int(value)
    if not MIN_DIAL <= dial <= MAX_DIAL:
        raise argparse.ArgumentTypeError(f"dial must be between {MIN_DIAL} and {MAX_DIAL}")
    return dial


def _budget(value: str) -> int:
    budget = int(value)
    if budget < 0:
        raise argparse.ArgumentTypeError("token budget must not be negative")
    return budget


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptdial",
        description="Compile rough requests into structured, budgeted prompts.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write detailed logs to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser(
        "compile",
        help="Compile a request into a rendered prompt.",
    )
    _add_verbose_option(compile_parser, suppress_default=True)
    _add_config_option(compile_parser)
    compile_parser.add_argument("text", help="Raw request text; @alias references pull in artifacts.")
    compile_parser.add_argument("--dial", type=_dial, default=None, help="Detail level from 0 to 5.")
    compile_parser.add_argument(
        "--budget",
        type=_budget,
        default=None,
        help="Token budget for injected artifact blocks (0 means unlimited).",
    )
    compile_parser.add_argument(
        "--template",
        choices=DEFAULT_REGISTRY.ids(),
        default=None,
        help="Force a template instead of detecting one.",
    )
    compile_parser.add_argument(
        "--artifact",
        action="append",
        default=[],
        dest="artifacts",
        help="Alias of an artifact to include even if it is not referenced (repeatable).",
    )
    compile_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full compile output as JSON instead of the rendered prompt.",
    )

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate (and repair) a spec JSON file.",
    )
    _add_verbose_option(validate_parser, suppress_default=True)
    validate_parser.add_argument("path", help="Path to a spec JSON file, or '-' for stdin.")

    artifacts_parser = subparsers.add_parser("artifacts", help="Inspect the artifact store.")
    _add_verbose_option(artifacts_parser, suppress_default=True)
    _add_config_option(artifacts_parser)
    artifacts_sub = artifacts_parser.add_subparsers(dest="artifacts_command", required=True)
    artifacts_sub.add_parser("list", help="List stored artifacts and their aliases.")
    artifacts_sub.add_parser("seed", help="Populate an empty store with the built-in artifacts.")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP service.")
    _add_verbose_option(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Bind address (overrides config).")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (overrides config).")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for promptdial commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "validate":
        _run_validate(parser, args.path)
        return

    try:
        config = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "compile":
        _run_compile(parser, args, config)
    elif args.command == "artifacts":
        _run_artifacts(parser, args, config)
    elif args.command == "serve":
        if args.host:
            config.service.host = args.host
        if args.port:
            config.service.port = args.port
        run_service(config)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_compile(parser: argparse.ArgumentParser, args: argparse.Namespace, config: PromptDialConfig) -> None:
    try:
        store = open_store(config.store.path, seed=config.store.seed)
    except ArtifactStoreError as exc:
        parser.exit(1, f"{exc}\n")
    resolve, fetch = store_collaborators(store)
    compile_input = CompileInput(
        raw_input=args.text,
        dial=config.compiler.dial if args.dial is None else args.dial,
        token_budget=config.compiler.token_budget if args.budget is None else args.budget,
        template_override=args.template or config.compiler.template,
        force_artifacts=tuple(args.artifacts),
    )
    try:
        output = asyncio.run(compile_prompt(compile_input, resolve, fetch))
    except UnknownTemplateError as exc:
        parser.exit(1, f"{exc}\n")

    if args.json:
        print(json.dumps(compile_output_to_dict(output), indent=2))
        return
    print(output.rendered)
    status = "passed" if output.lint.passed else "failed"
    print(f"\nLint score: {output.lint.score} ({status})", file=sys.stderr)
    for result in output.lint.results:
        print(f"  [{result.severity}] {result.rule_id}: {result.message}", file=sys.stderr)


def _run_validate(parser: argparse.ArgumentParser, path: str) -> None:
    try:
        text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
        data: Any = json.loads(text)
    except (OSError, json.JSONDecodeError) as exc:
        parser.exit(1, f"Failed to read spec: {exc}\n")

    result = validate_and_repair_spec(data)
    if result.valid:
        print(json.dumps(result.data, indent=2))
        if result.repaired:
            print("Spec was repaired.", file=sys.stderr)
        return
    for error in result.errors or []:
        print(error, file=sys.stderr)
    parser.exit(1, "Spec is invalid.\n")


def _run_artifacts(parser: argparse.ArgumentParser, args: argparse.Namespace, config: PromptDialConfig) -> None:
    try:
        seeding = args.artifacts_command == "seed"
        store = open_store(config.store.path, seed=config.store.seed and not seeding)
        if seeding:
            added = store.seed()
            print(f"Seeded {added} artifact(s)" if added else "Store already has artifacts")
            return
    except ArtifactStoreError as exc:
        parser.exit(1, f"{exc}\n")

    artifacts = store.list_all()
    if not artifacts:
        print("No artifacts stored")
        return
    for artifact in artifacts:
        aliases = ", ".join(f"@{alias}" for alias in artifact.aliases)
        print(f"{artifact.id}  {artifact.name}  [{aliases}]  {len(artifact.blocks)} block(s)")


if __name__ == "__main__":
    main(sys.argv[1:])
