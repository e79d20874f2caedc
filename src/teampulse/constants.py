"""Heuristic thresholds used across the analytics engine.

All classification boundaries live here so that tests can target them
directly and so that each rule reads its limits from a single table.
"""


class ActivityThresholds:
    """Contributor productivity, consistency and trend boundaries."""

    # Consistency score is 1 - min(1, CV) of the commit counts of active weeks
    IRREGULAR_CONSISTENCY = 0.3
    # Peak week at or above this multiple of the contributor's own mean active week
    BURST_MULTIPLIER = 2.0

    TREND_WINDOW_DAYS = 30
    TREND_MIN_COMMITS = 4
    TREND_IMPROVING_RATIO = 1.2
    TREND_DECLINING_RATIO = 0.8

    PERIOD_WINDOW_DAYS = 7
    PERIOD_MIN_COMMITS = 2
    SILENT_GAP_DAYS = 7

    RATING_EXCEPTIONAL = 1.5
    RATING_ABOVE_AVERAGE = 1.2
    RATING_AVERAGE = 0.8


class HealthThresholds:
    """Additive deductions applied to the 100 point health baseline."""

    BASELINE = 100
    # Returned when there are no commits at all
    NEUTRAL_SCORE = 50

    VELOCITY_CRITICAL = 1.0
    VELOCITY_CRITICAL_PENALTY = 20
    VELOCITY_LOW = 2.0
    VELOCITY_LOW_PENALTY = 10

    SOLO_TEAM_SIZE = 1
    SOLO_TEAM_PENALTY = 30
    SMALL_TEAM_SIZE = 2
    SMALL_TEAM_PENALTY = 15

    # A contributor counts toward the bus factor above this share of commits
    MAJOR_CONTRIBUTOR_SHARE = 0.2
    BUS_FACTOR_CRITICAL = 1
    BUS_FACTOR_CRITICAL_PENALTY = 25
    BUS_FACTOR_LOW = 2
    BUS_FACTOR_LOW_PENALTY = 10

    # Velocity trend compares the later half of the window to the earlier half
    VELOCITY_TREND_PERCENT = 20.0
    SEVERE_DECLINE_PERCENT = -50.0
    SEVERE_DECLINE_PENALTY = 15
    DECLINE_PENALTY = 5
    GROWTH_PERCENT = 20.0
    GROWTH_BONUS = 10

    LARGE_AVERAGE_COMMIT = 500
    LARGE_AVERAGE_COMMIT_PENALTY = 10
    MEDIUM_AVERAGE_COMMIT = 200
    MEDIUM_AVERAGE_COMMIT_PENALTY = 5

    LARGE_COMMIT_LINES = 500

    # Collaboration score blend
    TEAM_SIZE_WEIGHT = 0.6
    BUS_FACTOR_WEIGHT = 0.4
    TEAM_SIZE_HALF_SATURATION = 2
    BUS_FACTOR_HALF_SATURATION = 1


class IssueThresholds:
    """Boundaries for the rule-based issue scan."""

    LOW_ACTIVITY_HIGH = 2.0
    LOW_ACTIVITY_CRITICAL = 1.0

    DOMINANT_SHARE = 0.7
    DOMINANT_CRITICAL_SHARE = 0.9

    IRREGULAR_FRACTION = 0.5

    SHRINKING_HIGH_FRACTION = 0.5
    SHRINKING_MEDIUM_FRACTION = 0.3

    LARGE_COMMIT_FREQUENCY = 0.2
    LARGE_COMMIT_HIGH_AVERAGE = 500

    HOARDING_FILE_SHARE = 0.6
    HOARDING_MIN_CONTRIBUTORS = 2


class TrendThresholds:
    """Time-series analysis constants."""

    STABLE_SLOPE = 0.1
    ANOMALY_SIGMA = 2.0
    FORECAST_DAYS = 7
    MIN_POINTS = 2


class BenchmarkThresholds:
    """Team benchmark scaling."""

    PRODUCTIVITY_PER_WEEKLY_COMMIT = 10
    PRODUCTIVITY_CAP = 100


class TeamHealthThresholds:
    """Team health monitor boundaries."""

    VELOCITY_DECLINE_ALERT_PERCENT = -20.0
    MIN_TEAM_SIZE = 2
    IMPROVEMENT_SCORE = 80
    CENTRALIZED_SHARE = 0.7
    FRAGMENTED_SHARE = 0.2
    FRAGMENTED_TEAM_SIZE = 5
    # Velocity the declining-velocity alert asks to recover to, as a multiple of current
    VELOCITY_RECOVERY_MULTIPLIER = 1.2


class InsightThresholds:
    """Boundaries for narrative recommendations and risk factors."""

    HEALTH_RECOMMENDATION_SCORE = 70
    LOW_BUS_FACTOR = 2
    SINGLE_POINT_BUS_FACTOR = 1
    DECLINING_RISK_FRACTION = 0.3


SEVERITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}
