"""Command-line interface for TeamPulse Analytics."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import click

from ._version import __version__
from .config import ConfigLoader, ConfigurationError, GlobalConfig, ProjectConfig, WeekStart
from .core.history import FileHistoryProvider, HistoryError
from .models import AnalysisWindow, AnalyticsResult
from .pipeline import AnalysisInputError, analyze_repository
from .reports.json_exporter import AnalyticsJSONExporter
from .ui.display import AnalyticsDisplay

DATE_FORMATS = ["%Y-%m-%d"]


def configure_logging(log: str) -> None:
    """Apply the --log option to the root and package loggers."""
    if log.upper() != "NONE":
        log_level = getattr(logging, log.upper())
        logging.basicConfig(
            level=log_level,
            format="[%(levelname)s] %(filename)s:%(lineno)d - %(message)s",
            handlers=[logging.StreamHandler(sys.stderr)],
            force=True,
        )
        logging.getLogger("teampulse").setLevel(log_level)
        logging.getLogger(__name__).info(f"Logging enabled at {log.upper()} level")
    else:
        logging.getLogger().setLevel(logging.CRITICAL)
        logging.getLogger("teampulse").setLevel(logging.CRITICAL)


def history_options(func):
    """Options shared by every command that runs an analysis."""
    options = [
        click.option(
            "--history",
            "-H",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            required=True,
            help="Commit history: `git log --numstat --date=iso-strict` output, or a JSON/YAML dump",
        ),
        click.option(
            "--repository",
            "-r",
            default=None,
            help="Repository name (default: history file name without suffix)",
        ),
        click.option(
            "--config",
            "-c",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="Project configuration file (author groups and exclusions)",
        ),
        click.option(
            "--config-dir",
            type=click.Path(exists=True, file_okay=False, path_type=Path),
            default=None,
            help="Directory holding <repository>_config.yaml files",
        ),
        click.option(
            "--global-config",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            default=None,
            help="Global settings file (firstDayOfWeek)",
        ),
        click.option("--since", type=click.DateTime(formats=DATE_FORMATS), default=None),
        click.option("--until", type=click.DateTime(formats=DATE_FORMATS), default=None),
        click.option("--author", default=None, help="Only analyze commits by this raw author name"),
        click.option(
            "--first-day-of-week",
            type=click.Choice([w.value for w in WeekStart], case_sensitive=False),
            default=None,
            help="Overrides the global setting",
        ),
        click.option(
            "--log",
            type=click.Choice(["none", "INFO", "DEBUG"], case_sensitive=False),
            default="none",
            help="Enable logging with specified level (default: none)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def run_analysis(
    history: Path,
    repository: Optional[str],
    config_path: Optional[Path],
    config_dir: Optional[Path],
    global_config: Optional[Path],
    since: Optional[datetime],
    until: Optional[datetime],
    author: Optional[str],
    first_day_of_week: Optional[str],
) -> AnalyticsResult:
    """Resolve files into collaborators and run the pipeline.

    Raises:
        click.ClickException: Configuration, history or input errors
    """
    repository = repository or history.stem

    def load_config(name: str) -> ProjectConfig:
        if config_path is not None:
            return ConfigLoader.load_project_config(config_path)
        if config_dir is not None:
            return ConfigLoader.load_for_repository(config_dir, name)
        return ProjectConfig()

    try:
        settings = ConfigLoader.load_global_config(global_config)
        if first_day_of_week:
            settings = GlobalConfig(first_day_of_week=first_day_of_week.lower())

        window = AnalysisWindow(
            since=since.date() if since else None,
            until=until.date() if until else None,
        )
        return analyze_repository(
            repository,
            FileHistoryProvider(history),
            config_loader=load_config,
            window=window,
            author=author,
            global_config=settings,
        )
    except (ConfigurationError, AnalysisInputError, HistoryError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="TeamPulse Analytics")
@click.help_option("-h", "--help")
def cli() -> None:
    """TeamPulse Analytics - team and project health from commit history."""


@cli.command(name="analyze")
@history_options
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Terminal output format (default: table)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the JSON result to this file",
)
def analyze_command(
    history: Path,
    repository: Optional[str],
    config_path: Optional[Path],
    config_dir: Optional[Path],
    global_config: Optional[Path],
    since: Optional[datetime],
    until: Optional[datetime],
    author: Optional[str],
    first_day_of_week: Optional[str],
    log: str,
    output_format: str,
    output: Optional[Path],
) -> None:
    """Analyze a repository's commit history."""
    configure_logging(log)

    result = run_analysis(
        history, repository, config_path, config_dir, global_config,
        since, until, author, first_day_of_week,
    )

    exporter = AnalyticsJSONExporter()
    if output is not None:
        exporter.export(result, output)

    if output_format.lower() == "json":
        click.echo(exporter.to_json(result))
    else:
        display = AnalyticsDisplay()
        display.show_header()
        display.show_result(result)
        if output is not None:
            click.echo(f"JSON written to {output}")


@cli.command(name="trends")
@history_options
def trends_command(
    history: Path,
    repository: Optional[str],
    config_path: Optional[Path],
    config_dir: Optional[Path],
    global_config: Optional[Path],
    since: Optional[datetime],
    until: Optional[datetime],
    author: Optional[str],
    first_day_of_week: Optional[str],
    log: str,
) -> None:
    """Show regression trend, anomalies and forecast of daily commits."""
    configure_logging(log)

    result = run_analysis(
        history, repository, config_path, config_dir, global_config,
        since, until, author, first_day_of_week,
    )
    AnalyticsDisplay().show_trends(result.trend_analysis)


@cli.command(name="validate-config")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Project configuration file to validate",
)
@click.option(
    "--global-config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Global settings file to validate",
)
def validate_config_command(config_path: Optional[Path], global_config: Optional[Path]) -> None:
    """Check configuration files without running an analysis."""
    if config_path is None and global_config is None:
        raise click.UsageError("Pass --config and/or --global-config")

    try:
        if config_path is not None:
            config = ConfigLoader.load_project_config(config_path)
            click.echo(
                f"✅ {config_path}: {len(config.grouped_authors)} author groups, "
                f"{len(config.excluded_users)} excluded users"
            )
        if global_config is not None:
            settings = ConfigLoader.load_global_config(global_config)
            click.echo(f"✅ {global_config}: first day of week is {settings.first_day_of_week.value}")
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
