# File: ctrlgen/cli.py
"""
ctrlgen - Command-Line Interface
=================================

CLI built with the standard-library ``argparse`` module.  Generated code is
written to stdout; logs and the summary report go to stderr.

Usage examples::

    # Every web method for a model
    python -m ctrlgen --model app.models:BlogPost

    # Selected API methods for a nested resource
    python -m ctrlgen -m app.models:Comment -p app.models:Post --api \\
        --methods index,store

    # Custom naming conventions
    python -m ctrlgen -m app.models:BlogPost -c ctrlgen.yaml -v

Exit codes:
    0 — success
    2 — generation error
    4 — input/argument error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, NoReturn, Optional, Sequence

from ctrlgen.errors import ConfigError, ReflectionError, UnknownMethodError

# ---------------------------------------------------------------------------
# Logger (configured in _setup_logging)
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("ctrlgen")


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_GENERATION_ERROR: int = 2
EXIT_INPUT_ERROR: int = 4


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(verbosity: int) -> None:
    """
    Configure the root ctrlgen logger based on verbosity level.

    Args:
        verbosity: 0 = WARNING, 1 = INFO, 2+ = DEBUG.
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler: logging.StreamHandler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    fmt: str = "%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s"
    datefmt: str = "%H:%M:%S"
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root_logger: logging.Logger = logging.getLogger("ctrlgen")
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplication
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser."""
    from ctrlgen import __version__

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="ctrlgen",
        description=(
            "ctrlgen — Controller Method Generator.\n\n"
            "Generates view, redirect and API controller methods (plus the "
            "imports they need) from a model's metadata."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s -m app.models:BlogPost\n"
            "  %(prog)s -m app.models:Comment -p app.models:Post --api\n"
            "  %(prog)s -m app.models:BlogPost --methods store -n save\n"
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"ctrlgen v{__version__}",
    )

    # --- Required arguments ---
    parser.add_argument(
        "-m", "--model",
        type=str,
        required=True,
        metavar="PATH",
        help="Model to generate for, as 'package.module:ClassName'.",
    )

    # --- Generation ---
    gen_group = parser.add_argument_group("generation")
    gen_group.add_argument(
        "-p", "--parent",
        type=str,
        default=None,
        metavar="PATH",
        help="Parent model, as 'package.module:ClassName'.",
    )
    gen_group.add_argument(
        "--api",
        action="store_true",
        default=False,
        help="Generate API methods instead of web (view/redirect) methods.",
    )
    gen_group.add_argument(
        "--methods",
        type=str,
        default=None,
        metavar="LIST",
        help="Comma-separated method names (default: all for the controller kind).",
    )
    gen_group.add_argument(
        "-n", "--method-name",
        type=str,
        default=None,
        metavar="NAME",
        help="Override the generated method's name (requires a single --methods entry).",
    )
    gen_group.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Generator configuration file (YAML or JSON).",
    )

    # --- Output ---
    out_group = parser.add_argument_group("output")
    out_group.add_argument(
        "--summary",
        action="store_true",
        default=False,
        help="Print the generation report to stderr.",
    )
    out_group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v = INFO, -vv = DEBUG).",
    )

    return parser


def _split_methods(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


def _run_generation(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Load inputs, generate, print.  Returns the exit code."""
    from ctrlgen.generator import ControllerGenerator, GenerationReport, load_object
    from ctrlgen.models import GeneratorConfig, GeneratedMethod, load_config_file

    methods: List[str] = _split_methods(args.methods)
    if args.method_name and len(methods) != 1:
        logger.error("--method-name requires exactly one entry in --methods.")
        parser.print_usage(sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        config: GeneratorConfig = (
            load_config_file(Path(args.config)) if args.config else GeneratorConfig()
        )
        model: Any = load_object(args.model)
        parent: Optional[Any] = load_object(args.parent) if args.parent else None
    except (ConfigError, ReflectionError) as exc:
        logger.error("%s", exc)
        return EXIT_INPUT_ERROR

    generator: ControllerGenerator = ControllerGenerator(config)

    if args.method_name:
        try:
            method = generator.build_method(
                methods[0],
                model,
                parent=parent,
                api=args.api,
                method_name=args.method_name,
            )
        except ReflectionError as exc:
            logger.error("%s", exc)
            return EXIT_GENERATION_ERROR
        except UnknownMethodError as exc:
            logger.error("%s", exc)
            return EXIT_INPUT_ERROR
        result: GeneratedMethod = generator.generate_method(method)
        report: GenerationReport = GenerationReport(
            model=args.model, parent=args.parent, is_api=args.api, methods=[result]
        )
    else:
        report = generator.generate(model, methods or None, parent=parent, api=args.api)

    sys.stdout.write(report.render())

    if args.summary:
        print(report.summary(), file=sys.stderr)

    return EXIT_SUCCESS if report.success else EXIT_GENERATION_ERROR


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def cli_main(argv: Optional[Sequence[str]] = None) -> NoReturn:
    """
    Main CLI entry point.

    Can be called from ``__main__.py`` or directly for testing.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:]).
    """
    parser: argparse.ArgumentParser = _build_parser()
    args: argparse.Namespace = parser.parse_args(argv)

    _setup_logging(args.verbose)

    logger.info("Model:   %s", args.model)
    logger.info("Parent:  %s", args.parent or "-")
    logger.info("Kind:    %s", "api" if args.api else "web")

    exit_code: int = _run_generation(args, parser)

    if exit_code == EXIT_SUCCESS:
        logger.info("Generation completed successfully.")
    else:
        logger.error("Generation failed with exit code %d.", exit_code)

    sys.exit(exit_code)


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "cli_main",
    "EXIT_SUCCESS",
    "EXIT_GENERATION_ERROR",
    "EXIT_INPUT_ERROR",
]

logger.debug("ctrlgen.cli loaded.")
