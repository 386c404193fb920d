"""Command-line interface for Jersey Swap.

Drives the jersey swap workflow end to end: load images, swap the jersey,
optionally replace the background, and write the result to disk.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.table import Table

from jerseyswap.core.config.loader import load_app_config
from jerseyswap.core.config.models import AppConfig
from jerseyswap.core.errors import JerseySwapError, MissingCredentialError
from jerseyswap.core.generation.client import GenerationClient
from jerseyswap.core.generation.factory import create_generation_client
from jerseyswap.core.media.files import (
    DEFAULT_RESULT_FILENAME,
    load_image_asset,
    save_image_asset,
)
from jerseyswap.core.prompts.models import NEGATIVE_CONSTRAINT_OPTIONS, JerseyType
from jerseyswap.core.utils.logging import configure_logging
from jerseyswap.core.workflow.machine import JerseySwapWorkflow
from jerseyswap.core.workflow.models import WorkflowState

console = Console()
logger = logging.getLogger(__name__)

_JERSEY_TYPE_CHOICES: dict[str, JerseyType] = {
    "custom": JerseyType.CUSTOM_DESIGN,
    "official": JerseyType.OFFICIAL_JERSEY,
}


def apply_negative_constraints(
    workflow: JerseySwapWorkflow, avoid: list[str], *, keep_defaults: bool
) -> frozenset[str]:
    """Bring the session's negative constraints to the requested selection.

    Args:
        workflow: Workflow in UPLOAD state.
        avoid: Extra constraints to select.
        keep_defaults: Whether the configured defaults stay selected.

    Returns:
        Final selection.
    """
    desired = set(avoid)
    if keep_defaults:
        desired |= workflow.session.negative_constraints

    for option in NEGATIVE_CONSTRAINT_OPTIONS:
        if (option in desired) != (option in workflow.session.negative_constraints):
            workflow.toggle_negative_constraint(option)

    return workflow.session.negative_constraints


async def run_swap_async(
    args: argparse.Namespace,
    app_config: AppConfig,
    client: GenerationClient,
) -> int:
    """Run the swap (and optional background replacement) workflow.

    Args:
        args: Parsed CLI arguments
        app_config: Loaded application config
        client: Generation client

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    status = console.status("[bold]Preparing...[/bold]")
    workflow = JerseySwapWorkflow(
        client,
        config=app_config.workflow,
        on_status=lambda message: status.update(f"[bold]{message}[/bold]"),
    )

    try:
        workflow.set_player_image(load_image_asset(args.player))
        workflow.set_jersey_image(load_image_asset(args.jersey))
        background = load_image_asset(args.background) if args.background else None
    except (FileNotFoundError, JerseySwapError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    if args.jersey_type:
        workflow.set_jersey_type(_JERSEY_TYPE_CHOICES[args.jersey_type])
    selected = apply_negative_constraints(
        workflow, args.avoid or [], keep_defaults=not args.no_default_avoid
    )

    console.print(f"Jersey type: {workflow.session.jersey_type.value}")
    ordered = [option for option in NEGATIVE_CONSTRAINT_OPTIONS if option in selected]
    console.print(f"Avoiding: {', '.join(ordered) or '(nothing)'}")
    console.print(f"Model: {client.provider_type.value}/{client.model}")

    with status:
        state = await workflow.perform_jersey_swap()

    if state is not WorkflowState.PREVIEW:
        console.print(f"[red]ERROR: {workflow.session.last_error}[/red]")
        return 1
    console.print("[green]✅ Jersey swapped[/green]")

    if background is not None:
        workflow.begin_background_edit()
        workflow.set_background_image(background)
        with status:
            state = await workflow.perform_background_replace()

        if state is not WorkflowState.PREVIEW:
            console.print(f"[red]ERROR: {workflow.session.last_error}[/red]")
            return 1
        console.print("[green]✅ Background replaced[/green]")

    result = workflow.session.result_image
    assert result is not None  # PREVIEW always carries a result
    out = Path(args.out) if args.out else Path(app_config.output_dir) / DEFAULT_RESULT_FILENAME
    written = save_image_asset(result, out)
    console.print(f"[green]📁 Result saved to:[/green] {written}")
    return 0


def run_swap(args: argparse.Namespace) -> None:
    """Load config, build the client and run the swap workflow."""
    app_config = load_app_config(Path(args.app_config))
    configure_logging(
        level=args.log_level or app_config.logging.level,
        format_string=app_config.logging.format,
        filename=app_config.logging.filename,
        structured=app_config.logging.structured,
    )

    try:
        client = create_generation_client(app_config.generation)
    except MissingCredentialError as e:
        console.print(f"[red]ERROR: {e}[/red]")
        console.print("\nTo run Jersey Swap:")
        console.print("  export GEMINI_API_KEY='your-key-here'")
        console.print("  jerseyswap swap --player <file> --jersey <file>")
        sys.exit(1)

    exit_code = asyncio.run(run_swap_async(args, app_config, client))
    sys.exit(exit_code)


def list_options(args: argparse.Namespace) -> None:
    """Print jersey types and negative constraint options."""
    table = Table(title="Negative constraints")
    table.add_column("Option")
    for option in NEGATIVE_CONSTRAINT_OPTIONS:
        table.add_row(option)
    console.print(table)
    console.print(
        "Jersey types: "
        + ", ".join(f"{key} ({value.value})" for key, value in _JERSEY_TYPE_CHOICES.items())
    )


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="jerseyswap",
        description="Jersey Swap - replace a player's jersey using an image generation model",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    swap = sub.add_parser("swap", help="Swap the jersey on a player photo")
    swap.add_argument("--player", required=True, help="Path to the player photo")
    swap.add_argument("--jersey", required=True, help="Path to the jersey design image")
    swap.add_argument(
        "--jersey-type",
        choices=sorted(_JERSEY_TYPE_CHOICES),
        default=None,
        help="Jersey type (default: from config, 'custom')",
    )
    swap.add_argument(
        "--avoid",
        action="append",
        choices=NEGATIVE_CONSTRAINT_OPTIONS,
        metavar="CONSTRAINT",
        help="Negative constraint to add (repeatable; see 'jerseyswap options')",
    )
    swap.add_argument(
        "--no-default-avoid",
        action="store_true",
        help="Do not keep the default negative constraints",
    )
    swap.add_argument("--background", default=None, help="Optional new background image")
    swap.add_argument(
        "--out", default=None, help=f"Output file (default: <output_dir>/{DEFAULT_RESULT_FILENAME})"
    )
    swap.add_argument(
        "--app-config",
        default="config.json",
        help="Path to app config JSON/YAML (default: config.json)",
    )
    swap.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )

    sub.add_parser("options", help="List jersey types and negative constraints")

    return p


def main() -> None:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args()

    if args.cmd == "swap":
        run_swap(args)
    elif args.cmd == "options":
        list_options(args)


if __name__ == "__main__":
    main()
