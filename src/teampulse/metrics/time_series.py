"""Statistical analysis of the daily commit-count series.

Runs on the gap-filled calendar series only and is independent of the
contributor and health metrics: regression trend, volatility, residual
anomalies, a short linear forecast and day-of-week / month seasonality.
"""

import logging
from datetime import timedelta

import numpy as np
import pandas as pd

from ..config.schema import WeekStart
from ..constants import TrendThresholds
from ..models import (
    Anomaly,
    AnomalyType,
    DailyActivity,
    ForecastPoint,
    TrendAnalysis,
    TrendDirection,
    WeeklyVelocity,
)
from ..utils.date_utils import day_of_week_index, get_week_start

logger = logging.getLogger(__name__)


class TimeSeriesAnalyzer:
    """Trend, volatility, anomaly, forecast and seasonality over daily commit counts.

    The series must be contiguous (one entry per calendar day); index ``i``
    is used as the regression abscissa.
    """

    def __init__(
        self,
        week_start: WeekStart = WeekStart.SUNDAY,
        thresholds: type[TrendThresholds] = TrendThresholds,
    ) -> None:
        self.week_start = WeekStart(week_start)
        self.thresholds = thresholds

    def analyze(self, series: list[DailyActivity]) -> TrendAnalysis:
        if len(series) < self.thresholds.MIN_POINTS:
            return TrendAnalysis(week_start=self.week_start)

        y = np.array([activity.commit_count for activity in series], dtype=float)
        slope, intercept = self.linear_regression(y)
        mean = float(y.mean())
        std = float(y.std())

        analysis = TrendAnalysis(
            slope=slope,
            intercept=intercept,
            trend=self.classify_slope(slope),
            volatility=std / mean if mean > 0 else 0.0,
            anomalies=self.detect_anomalies(series, y, slope, intercept, std),
            forecast=self.forecast(series, slope, intercept),
            week_start=self.week_start,
        )
        analysis.day_of_week, analysis.month_of_year = self.seasonality(series)

        logger.debug(
            f"Trend over {len(series)} days: slope={slope:.3f} ({analysis.trend.value}), "
            f"{len(analysis.anomalies)} anomalies"
        )
        return analysis

    @staticmethod
    def linear_regression(y: np.ndarray) -> tuple[float, float]:
        """Closed-form least squares of ``y`` against ``x = 0..n-1``."""
        n = len(y)
        x = np.arange(n, dtype=float)
        sum_x, sum_y = x.sum(), y.sum()
        sum_xy, sum_x2 = (x * y).sum(), (x * x).sum()

        denominator = n * sum_x2 - sum_x * sum_x
        if denominator == 0:
            return 0.0, float(sum_y / n) if n else 0.0
        slope = (n * sum_xy - sum_x * sum_y) / denominator
        intercept = (sum_y - slope * sum_x) / n
        return float(slope), float(intercept)

    def classify_slope(self, slope: float) -> TrendDirection:
        if slope > self.thresholds.STABLE_SLOPE:
            return TrendDirection.INCREASING
        if slope < -self.thresholds.STABLE_SLOPE:
            return TrendDirection.DECREASING
        return TrendDirection.STABLE

    def detect_anomalies(
        self,
        series: list[DailyActivity],
        y: np.ndarray,
        slope: float,
        intercept: float,
        std: float,
    ) -> list[Anomaly]:
        """Points further than two standard deviations from the regression line.

        The band is strict: a residual of exactly ``2 * std`` is not flagged.
        """
        threshold = self.thresholds.ANOMALY_SIGMA * std
        anomalies = []
        for i, activity in enumerate(series):
            difference = y[i] - (slope * i + intercept)
            if abs(difference) > threshold:
                anomalies.append(
                    Anomaly(
                        day=activity.day,
                        value=activity.commit_count,
                        type=AnomalyType.HIGH if difference > 0 else AnomalyType.LOW,
                    )
                )
        return anomalies

    def forecast(
        self, series: list[DailyActivity], slope: float, intercept: float
    ) -> list[ForecastPoint]:
        """Extend the regression line past the last observed day, floored at zero."""
        n = len(series)
        last_day = series[-1].day
        return [
            ForecastPoint(
                day=last_day + timedelta(days=step + 1),
                value=round(max(0.0, slope * (n + step) + intercept), 2),
            )
            for step in range(self.thresholds.FORECAST_DAYS)
        ]

    def seasonality(self, series: list[DailyActivity]) -> tuple[dict[int, float], dict[int, float]]:
        """Mean daily commits per weekday position and per calendar month.

        Weekday keys are 0..6 counted from the configured first day of week,
        month keys are 1..12. Buckets with no observed days are omitted.
        """
        frame = pd.DataFrame(
            {
                "dow": [day_of_week_index(a.day, self.week_start) for a in series],
                "month": [a.day.month for a in series],
                "commits": [a.commit_count for a in series],
            }
        )
        by_dow = frame.groupby("dow")["commits"].mean()
        by_month = frame.groupby("month")["commits"].mean()
        return (
            {int(key): float(value) for key, value in by_dow.items()},
            {int(key): float(value) for key, value in by_month.items()},
        )


def weekly_velocity(
    series: list[DailyActivity], week_start: WeekStart = WeekStart.SUNDAY
) -> list[WeeklyVelocity]:
    """Commits per week and the largest single-day contributor count in each week."""
    if not series:
        return []

    frame = pd.DataFrame(
        {
            "week": [get_week_start(a.day, week_start) for a in series],
            "commits": [a.commit_count for a in series],
            "contributors": [a.distinct_contributor_count for a in series],
        }
    )
    grouped = frame.groupby("week", sort=True).agg({"commits": "sum", "contributors": "max"})
    return [
        WeeklyVelocity(week_start=week, commits=int(row.commits), contributors=int(row.contributors))
        for week, row in grouped.iterrows()
    ]
