"""Rich terminal rendering of analysis results."""

import logging
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .._version import __version__
from ..models import AnalyticsResult, Severity, TrendAnalysis

logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "cyan",
}


def _score_style(score: int) -> str:
    if score >= 80:
        return "bold green"
    if score >= 60:
        return "bold yellow"
    return "bold red"


class AnalyticsDisplay:
    """Print analysis summaries as rich panels and tables."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def show_header(self) -> None:
        title = Text(f"TeamPulse Analytics v{__version__}", style="bold cyan", justify="center")
        self.console.print(Panel(title, box=box.DOUBLE, padding=(0, 1), style="bright_blue"))

    def show_result(self, result: AnalyticsResult) -> None:
        self.show_summary(result)
        self.show_contributors(result)
        self.show_issues(result)
        self.show_insights(result)

    def show_summary(self, result: AnalyticsResult) -> None:
        health = result.project_health
        summary = result.summary

        table = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        table.add_row("Repository", result.repository or "-")
        table.add_row("Period", f"{result.window_start} to {result.window_end}")
        table.add_row(
            "Commits",
            f"{summary.total_commits_with_config} analyzed of {summary.total_commits}",
        )
        table.add_row("Contributors", str(len(summary.all_contributors)))
        table.add_row(
            "Health score",
            Text(f"{health.overall_score}/100", style=_score_style(health.overall_score)),
        )
        table.add_row(
            "Velocity",
            f"{health.velocity.current:.2f} commits/week ({health.velocity.trend.value}, "
            f"{health.velocity.change_percent:+.1f}%)",
        )
        table.add_row("Bus factor", str(health.collaboration.bus_factor))
        table.add_row("Team risk", result.team_health.risk_level.value)

        self.console.print(Panel(table, title="Summary", border_style="blue"))

    def show_contributors(self, result: AnalyticsResult) -> None:
        if not result.contributors:
            self.console.print("[dim]No contributors in this period.[/dim]")
            return

        table = Table(title="Contributors", box=box.ROUNDED, header_style="bold magenta")
        table.add_column("#", justify="right")
        table.add_column("Name", style="cyan")
        table.add_column("Commits", justify="right")
        table.add_column("Commits/wk", justify="right")
        table.add_column("Lines/commit", justify="right")
        table.add_column("Consistency", justify="right")
        table.add_column("Pattern")
        table.add_column("Trend")
        table.add_column("Rating")

        for performance in result.contributors:
            table.add_row(
                str(performance.commit_rank),
                performance.name,
                str(performance.aggregate.commit_count),
                f"{performance.commits_per_week:.2f}",
                f"{performance.lines_per_commit:.1f}",
                f"{performance.consistency_score:.2f}",
                performance.activity_pattern.value,
                performance.trend_last_30_days.value,
                performance.performance_rating.value.replace("_", " "),
            )
        self.console.print(table)

    def show_issues(self, result: AnalyticsResult) -> None:
        if not result.detected_issues:
            self.console.print("[green]No issues detected.[/green]")
            return

        table = Table(title="Detected Issues", box=box.ROUNDED, header_style="bold magenta")
        table.add_column("Severity")
        table.add_column("Issue")
        table.add_column("Affected")
        for issue in result.detected_issues:
            table.add_row(
                Text(issue.severity.value, style=SEVERITY_STYLES[issue.severity]),
                f"{issue.title}\n[dim]{issue.description}[/dim]",
                ", ".join(issue.affected_contributors) or "-",
            )
        self.console.print(table)

    def show_insights(self, result: AnalyticsResult) -> None:
        sections = (
            ("Key findings", result.insights.key_findings, "green"),
            ("Recommendations", result.insights.recommendations, "yellow"),
            ("Risk factors", result.insights.risk_factors, "red"),
        )
        for title, lines, style in sections:
            if lines:
                body = "\n".join(f"- {line}" for line in lines)
                self.console.print(Panel(body, title=title, border_style=style))

    def show_trends(self, analysis: TrendAnalysis) -> None:
        table = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        table.add_row("Trend", f"{analysis.trend.value} (slope {analysis.slope:+.3f})")
        table.add_row("Volatility", f"{analysis.volatility:.2f}")
        table.add_row("Anomalies", str(len(analysis.anomalies)))
        self.console.print(Panel(table, title="Trend Analysis", border_style="blue"))

        if analysis.anomalies:
            anomalies = Table(title="Anomalies", box=box.ROUNDED)
            anomalies.add_column("Date")
            anomalies.add_column("Commits", justify="right")
            anomalies.add_column("Type")
            for anomaly in analysis.anomalies:
                anomalies.add_row(str(anomaly.day), str(anomaly.value), anomaly.type.value)
            self.console.print(anomalies)

        if analysis.forecast:
            forecast = Table(title="7-day Forecast", box=box.ROUNDED)
            forecast.add_column("Date")
            forecast.add_column("Commits", justify="right")
            for point in analysis.forecast:
                forecast.add_row(str(point.day), f"{point.value:.2f}")
            self.console.print(forecast)
