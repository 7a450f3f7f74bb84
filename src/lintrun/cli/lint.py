"""CLI commands: lintrun lint / lintrun analyze <paths>."""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path

import click
from rich.console import Console

from lintrun.config import LintRunConfig, load_configuration
from lintrun.errors import FatalMisconfiguration, LintRunError
from lintrun.lint.options import BaselineSaveMode, Mode, RunOptions
from lintrun.lint.orchestrator import LintOrchestrator
from lintrun.lint.severity import check_modes
from lintrun.report import REPORTERS, reporter_from

console = Console(stderr=True)

EXIT_MISCONFIGURED = 3


def _common_options(func: Callable) -> Callable:
    options = [
        click.argument("paths", nargs=-1, type=click.Path()),
        click.option(
            "--config",
            "config_file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="Path to a .lintrun.yml configuration file.",
        ),
        click.option("--strict", is_flag=True, help="Upgrade warnings to errors."),
        click.option("--lenient", is_flag=True, help="Downgrade errors to warnings."),
        click.option(
            "--benchmark",
            is_flag=True,
            help="Write per-file and per-rule timing reports.",
        ),
        click.option(
            "--benchmark-dir",
            type=click.Path(file_okay=False, path_type=Path),
            default=".",
            show_default=True,
            help="Directory for benchmark reports.",
        ),
        click.option("--quiet", "-q", is_flag=True, help="Omit the status line."),
        click.option(
            "--reporter",
            "-r",
            type=click.Choice(sorted(REPORTERS)),
            help="Output format (overrides the configuration file).",
        ),
        click.option("--jobs", "-j", type=click.IntRange(min=1), help="Worker threads."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command()
@_common_options
@click.option("--use-baseline", is_flag=True, help="Suppress findings recorded in the baseline.")
@click.option(
    "--baseline",
    "baseline_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Baseline file (default: .lintrun-baseline.json under the first path).",
)
@click.option(
    "--baseline-mode",
    type=click.Choice([m.value for m in BaselineSaveMode]),
    help="Save only reported findings, or also the suppressed ones.",
)
@click.option("--no-cache", "ignore_cache", is_flag=True, help="Ignore and do not write the cache.")
@click.option(
    "--cache-path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Cache directory.",
)
@click.pass_context
def lint(
    ctx: click.Context,
    use_baseline: bool,
    baseline_path: Path | None,
    baseline_mode: str | None,
    ignore_cache: bool,
    cache_path: Path | None,
    **common,
) -> None:
    """Lint source files with the text rules."""
    _execute(
        Mode.LINT,
        common,
        use_baseline=use_baseline,
        baseline_path=baseline_path,
        baseline_mode=baseline_mode,
        ignore_cache=ignore_cache,
        cache_path=cache_path,
    )


@click.command()
@_common_options
@click.pass_context
def analyze(ctx: click.Context, **common) -> None:
    """Analyze Python sources with the syntax-tree rules. Never cached or baselined."""
    _execute(Mode.ANALYZE, common)


def _execute(
    mode: Mode,
    common: dict,
    use_baseline: bool = False,
    baseline_path: Path | None = None,
    baseline_mode: str | None = None,
    ignore_cache: bool = True,
    cache_path: Path | None = None,
) -> None:
    try:
        check_modes(common["lenient"], common["strict"])
        app_config = LintRunConfig.load()
        configuration = load_configuration(common["config_file"])
        reporter = reporter_from(common["reporter"] or configuration.reporter)
        options = RunOptions(
            mode=mode,
            paths=tuple(common["paths"]),
            strict=common["strict"],
            lenient=common["lenient"],
            benchmark=common["benchmark"],
            quiet=common["quiet"],
            use_baseline=use_baseline,
            baseline_path=baseline_path,
            baseline_mode=(
                BaselineSaveMode(baseline_mode)
                if baseline_mode
                else configuration.baseline_mode
            ),
            ignore_cache=ignore_cache,
            cache_path=cache_path,
            jobs=common["jobs"],
            benchmark_dir=common["benchmark_dir"],
        )
        orchestrator = LintOrchestrator(
            configuration,
            reporter,
            app_config=app_config,
            console=console,
        )
        result = orchestrator.run(options)
    except FatalMisconfiguration as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(EXIT_MISCONFIGURED)
    except LintRunError as e:
        raise click.ClickException(str(e)) from e

    if result.exit_code:
        sys.exit(result.exit_code)
