"""CLI entrypoints for resgen commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import CONFIG_FILE_NAME, ConfigError, GenerationConfig, IncludeConfig, load_config
from .emitters.cpp import CPP_TYPES
from .emitters.java import JAVA_TYPES
from .inference import SignatureError, describe, infer_signature
from .logging import configure_logging
from .orchestrator import GenerationReport, Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resgen",
        description="Generate locale-aware accessor classes and properties files from resource bundles.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log messages to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate sources for resource bundle files.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument(
        "includes",
        nargs="*",
        metavar="INCLUDE",
        help="Bundle (.xml) or locale (.properties) files, relative to the source directory.",
    )
    generate_parser.add_argument(
        "--config",
        type=Path,
        default=Path(CONFIG_FILE_NAME),
        help=f"Configuration file or directory holding {CONFIG_FILE_NAME}.",
    )
    generate_parser.add_argument(
        "--mode",
        help="Which sources to generate: managed (java), native (c++) or all.",
    )
    generate_parser.add_argument("--srcdir", type=Path, help="Directory holding the source files.")
    generate_parser.add_argument(
        "--destdir",
        type=Path,
        help="Directory for generated sources (defaults to the source directory).",
    )
    generate_parser.add_argument(
        "--resdir",
        type=Path,
        help="Directory for generated properties files (defaults to the destination directory).",
    )
    generate_parser.add_argument(
        "--locales",
        help="Comma-separated locales to generate, e.g. en_US,fr_FR.",
    )
    generate_parser.add_argument("--style", help="Accessor style: direct or functor.")
    generate_parser.add_argument(
        "--force",
        action="store_true",
        default=None,
        help="Regenerate files even if they are up to date.",
    )
    generate_parser.add_argument(
        "--comment-style",
        dest="comment_style",
        help="normal, or scm-safe to leave timestamps and full paths out of comments.",
    )

    signature_parser = subparsers.add_parser(
        "signature",
        help="Print the parameters inferred from a message template.",
    )
    _add_verbose_option(signature_parser, suppress_default=True)
    signature_parser.add_argument("text", help="Message template, e.g. 'Hello {0}'.")
    signature_parser.add_argument(
        "--backend",
        choices=("managed", "native"),
        default="managed",
        help="Type names to print the parameter list with.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for resgen commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "generate":
        try:
            config = _resolve_config(args)
            report = Orchestrator().run(config)
        except ConfigError as exc:
            parser.exit(1, f"resgen generate failed: {exc}\n")
        print(_summarize(report))
        if not report.ok:
            for failure in report.failures:
                print(f"  {failure.include}: {failure.message}", file=sys.stderr)
            parser.exit(1)
    elif args.command == "signature":
        try:
            signature = infer_signature(args.text)
        except SignatureError as exc:
            parser.exit(1, f"resgen signature failed: {exc}\n")
        types = JAVA_TYPES if args.backend == "managed" else CPP_TYPES
        print(describe(signature))
        print(signature.parameter_list(types))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _resolve_config(args: argparse.Namespace) -> GenerationConfig:
    """Configuration file values, overridden by command-line flags."""
    config = load_config(args.config)
    if args.includes:
        config.includes = [IncludeConfig(name=name) for name in args.includes]
    for key in ("mode", "srcdir", "destdir", "resdir", "locales", "style", "force", "comment_style"):
        value = getattr(args, key)
        if value is not None:
            setattr(config, key, value)
    return config.validate()


def _summarize(report: GenerationReport) -> str:
    return (
        f"{len(report.written)} file(s) generated, {len(report.skipped)} up to date, "
        f"{len(report.warnings)} warning(s), {len(report.failures)} failure(s)"
    )


if __name__ == "__main__":
    main(sys.argv[1:])
