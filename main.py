# main.py

"""Entry point for the swipeshop application (TUI or headless CLI)."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("swipeshop.main")

_COMMANDS = ("feed", "cart", "saved", "checkout", "analytics")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="swipeshop",
        description="Swipe-to-shop client: drag right to cart, "
                    "left to save for later.",
        epilog=f"Commands: {', '.join(_COMMANDS)}",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default=None,
        choices=_COMMANDS,
        help="Headless command. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "--email",
        default=None,
        help="Account email for headless commands.",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Account password for headless commands.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        default=False,
        help="With 'analytics': export the engagement pie chart.",
    )
    parser.add_argument(
        "-b",
        "--backend",
        choices=["supabase", "local"],
        default=None,
        help=f"Backend to use (default: {Settings.BACKEND}).",
    )
    return parser


def _run_tui(backend_name: str | None) -> None:
    """Launch the interactive Textual TUI."""
    from src.gateway.factory import build_backend
    from src.ui.app import SwipeShopApp

    try:
        backend = build_backend(backend_name)
    except ValueError as exc:
        logger.error("Backend setup failed: %s", exc)
        sys.exit(str(exc))

    try:
        app = SwipeShopApp(backend)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        backend.close()
        logger.info("swipeshop TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run one headless command and exit."""
    from src.cli.runner import run_command
    from src.gateway.factory import build_backend

    try:
        backend = build_backend(args.backend) if args.backend else None
    except ValueError as exc:
        logger.error("Backend setup failed: %s", exc)
        sys.exit(str(exc))

    try:
        exit_code = run_command(
            args.command,
            email=args.email,
            password=args.password,
            output_format=args.output_format,
            chart=args.chart,
            backend=backend,
        )
    finally:
        if backend is not None:
            backend.close()
    sys.exit(exit_code)


def main() -> None:
    """Route to TUI (no command) or headless CLI (command provided)."""
    log_file = setup_logging()
    logger.info("swipeshop starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.command is None:
        _run_tui(args.backend)
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
