"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from lintrun import __version__


@click.group()
@click.version_option(version=__version__, prog_name="lintrun")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """LintRun — lint and analyze source trees for hardcoded endpoints and secrets."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from lintrun.cli.lint import analyze, lint  # noqa: F811
    from lintrun.cli.rules import rules  # noqa: F811

    main.add_command(lint)
    main.add_command(analyze)
    main.add_command(rules)


_register_commands()
