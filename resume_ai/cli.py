from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Dict, List, Optional

from .config import PRESETS, Settings, build_orchestrator
from .llm_interaction import (
    PAYLOADS,
    ConfigurationError,
    GenerationExhaustedError,
    GenerationOrchestrator,
    GenerationRequest,
    InvalidStructuredOutputError,
    ProviderUnavailableError,
    StaticProvider,
    default_registry,
    hash_key,
    parse_structured,
)
from .prompt_builders import redact_pii

EXIT_CONFIG = 2
EXIT_UNAVAILABLE = 3
EXIT_EXHAUSTED = 4
EXIT_INVALID = 5


def _parse_vars(pairs: Optional[List[str]]) -> Dict[str, str]:
    variables: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"--var expects key=value, got {pair!r}")
        variables[key] = value
    return variables


def _echo(request: GenerationRequest) -> str:
    if request.format == "json":
        return json.dumps({"prompt": request.prompt, "meta": dict(request.meta)})
    return request.prompt


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="resume-ai", description="Resume generation orchestrator.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("prompts", help="List registered prompt templates")

    models = sub.add_parser("models", help="Show the candidate model order")
    models.add_argument("--prefer", help="Tier name or raw model id")

    digest = sub.add_parser("hash", help="Print the cache key for TEXT")
    digest.add_argument("text")

    gen = sub.add_parser("generate", help="Run one generation call")
    gen.add_argument("prompt_id")
    gen.add_argument("--var", dest="variables", action="append", help="Template variable key=value (repeatable)")
    gen.add_argument("--prefer", help="Tier name or raw model id")
    gen.add_argument("--preset", choices=sorted(PRESETS), help="Generation option preset")
    gen.add_argument("--json", dest="structured", action="store_true", help="Require a JSON object")
    gen.add_argument("--parse", action="store_true", help="Validate the JSON against the prompt's payload model (implies --json)")
    gen.add_argument("--redact", action="store_true", help="Mask e-mails, phone numbers and URLs in --var values")
    gen.add_argument("--timeout", type=float, help="Per-call provider timeout in seconds")
    gen.add_argument("--dry-run", action="store_true", help="Echo the rendered prompt instead of calling Ollama")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "hash":
        print(hash_key(args.text))
        return 0

    if args.command == "prompts":
        for template in default_registry().all().values():
            print(f"{template.id}\t{template.version}\t{template.name}")
        return 0

    settings = Settings.from_env()
    try:
        selector = settings.selector()
    except ConfigurationError as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return EXIT_CONFIG

    if args.command == "models":
        print("\n".join(selector.ordered(args.prefer)))
        return 0

    try:
        variables = _parse_vars(args.variables)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    if args.redact:
        variables = {key: redact_pii(value) for key, value in variables.items()}

    if args.dry_run:
        orchestrator = GenerationOrchestrator(
            [StaticProvider(default=_echo, name="DryRun")],
            default_registry(),
            selector,
            verbose=args.verbose,
        )
    else:
        orchestrator = build_orchestrator(settings, verbose=args.verbose)

    options = PRESETS[args.preset].as_options() if args.preset else None

    try:
        result = orchestrator.generate(
            args.prompt_id,
            variables,
            args.prefer,
            options,
            args.structured or args.parse,
            timeout=args.timeout,
        )
    except ConfigurationError as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return EXIT_CONFIG
    except ProviderUnavailableError as exc:
        print(f"[unavailable] {exc}", file=sys.stderr)
        return EXIT_UNAVAILABLE
    except GenerationExhaustedError as exc:
        print(f"[exhausted] {exc}", file=sys.stderr)
        return EXIT_EXHAUSTED

    payload = asdict(result)
    payload["provider_meta"] = dict(result.provider_meta)

    model_cls = PAYLOADS.get(args.prompt_id) if args.parse else None
    if model_cls is not None:
        try:
            payload["parsed"] = parse_structured(result, model_cls).model_dump(by_alias=True)
        except InvalidStructuredOutputError as exc:
            print(f"[invalid] {exc}", file=sys.stderr)
            return EXIT_INVALID

    print(json.dumps(payload, indent=2, default=str))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
