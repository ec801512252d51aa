"""Command-line entrypoint."""

from __future__ import annotations

import click

from src.cli.handlers import handle_rules, handle_run
from src.config.logging import configure_logging
from src.config.settings import load_settings


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Route natural-language instructions to structured actions."""

    try:
        settings = load_settings()
    except RuntimeError as exc:
        raise click.ClickException(str(exc)) from exc

    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.command()
@click.argument("instruction", nargs=-1)
@click.option("--json", "-j", "as_json", is_flag=True, help="Print the routed action as JSON.")
@click.pass_obj
def run(settings, instruction: tuple[str, ...], as_json: bool) -> None:
    """Route INSTRUCTION and print the resulting action."""

    code = handle_run(" ".join(instruction), settings=settings, as_json=as_json)
    if code:
        raise SystemExit(code)


@cli.command()
def rules() -> None:
    """List the routing rules in priority order."""

    handle_rules()


if __name__ == "__main__":
    cli()
