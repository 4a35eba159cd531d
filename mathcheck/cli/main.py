"""Main CLI entry point for running the pipeline."""

import argparse
import asyncio
import sys

from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from mathcheck.agents.prompts import format_number
from mathcheck.cli.runner import display_result, run_calc, run_single


def setup_logging(verbose: bool) -> None:
    """Setup loguru with Rich handler.

    Args:
        verbose: Enable debug logging if True
    """
    logger.remove()

    log_level = "DEBUG" if verbose else "INFO"
    logger.add(
        RichHandler(console=Console(stderr=True), rich_tracebacks=True),
        format="{message}",
        level=log_level,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Solve a math question with a worker agent and check it with a verifier agent",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # ========== RUN SUBCOMMAND ==========
    run_parser = subparsers.add_parser(
        "run",
        help="Run worker and verifier on one question",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run the built-in question with default settings
  python -m mathcheck.cli.main run

  # Run a custom question with a config file
  python -m mathcheck.cli.main run "What is 17% of 240?" --config config/pipeline.yaml
        """,
    )

    run_parser.add_argument(
        "question",
        nargs="?",
        default=None,
        help="Question to solve (default: question from config)",
    )

    run_parser.add_argument(
        "--config",
        default=None,
        help="Path to pipeline configuration YAML (default: built-in gpt-4o setup)",
    )

    run_parser.add_argument(
        "--output-dir",
        help="Trajectory output directory (overrides config)",
    )

    run_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # ========== CALC SUBCOMMAND ==========
    calc_parser = subparsers.add_parser(
        "calc",
        help="Evaluate an expression with the calculate tool",
    )

    calc_parser.add_argument(
        "expression",
        help="Arithmetic expression, e.g. '100 * 1.4 * 0.6'",
    )

    calc_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    return args


async def async_main(argv: list[str] | None = None) -> int:
    """Async main function.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    load_dotenv()
    args = parse_args(argv)
    setup_logging(args.verbose)
    console = Console()

    try:
        if args.command == "calc":
            result = run_calc(args.expression)
            if not result.success:
                console.print(f"[red]Error:[/red] {escape(result.error or '')}")
                return 1
            assert result.value is not None
            console.print(format_number(result.value), markup=False, highlight=False)

        elif args.command == "run":
            result = await run_single(
                config_path=args.config,
                question=args.question,
                output_dir=args.output_dir,
            )
            display_result(result, console)

        return 0

    except FileNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", style="bold red")
        return 1

    except Exception as e:
        console.print(f"[red]Pipeline Error:[/red] {escape(str(e))}", style="bold red")
        logger.exception("Pipeline execution failed")
        return 1


def main() -> None:
    """Main entry point."""
    try:
        exit_code = asyncio.run(async_main())
        sys.exit(exit_code)
    except KeyboardInterrupt:
        console = Console()
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
