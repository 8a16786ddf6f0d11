import math

import pandas as pd

from core.preprocess import flights_to_frame
from core.schema import AggregateStats, ChartPoint, ON_TIME, DELAYED, CANCELLED

NOT_AVAILABLE = 'N/A'

STATUS_COLORS = {
    ON_TIME: '#4ade80',
    DELAYED: '#f87171',
    CANCELLED: '#94a3b8',
}


def _counts_in_order(values: pd.Series) -> pd.Series:
    """Occurrence counts keyed by value, in order of first appearance."""
    return values.groupby(values, sort=False).size()


def _top_value(values: pd.Series) -> str:
    if values.empty:
        return NOT_AVAILABLE
    # idxmax keeps the first label among equal counts
    return _counts_in_order(values).idxmax()


def _percentage(part: int, total: int) -> int:
    if total == 0:
        return 0
    # Half-up, so 12.5 reads as 13
    return int(math.floor(100 * part / total + 0.5))


def compute_stats(flights: list) -> AggregateStats:
    """
    Calculates the headline numbers for the dashboard.

    Args:
        flights: The full list of FlightRecord objects.

    Returns:
        AggregateStats with:
        - total_flights, total_delays, total_cancellations
        - on_time_performance (whole percent, 0 when there are no flights)
        - most_active_airport (by departures)
        - most_delayed_airline (by number of delayed flights)
    """
    df = flights_to_frame(flights)
    status_counts = df['status'].value_counts()
    total = len(df)
    on_time = int(status_counts.get(ON_TIME, 0))

    delayed = df[df['status'] == DELAYED]

    return AggregateStats(
        total_flights=total,
        total_delays=int(status_counts.get(DELAYED, 0)),
        total_cancellations=int(status_counts.get(CANCELLED, 0)),
        on_time_performance=_percentage(on_time, total),
        most_active_airport=_top_value(df['departure_airport']),
        most_delayed_airline=_top_value(delayed['airline']),
    )


def airline_delay_series(flights: list, top_n: int = 5) -> list:
    """
    Counts delayed flights per airline for the bar chart.

    Airlines are ordered by delay count, highest first; ties keep the order in
    which the airlines first appear. Only the first `top_n` are returned.
    """
    df = flights_to_frame(flights)
    delayed = df[df['status'] == DELAYED]
    if delayed.empty:
        return []

    counts = _counts_in_order(delayed['airline'])
    counts = counts.sort_values(ascending=False, kind='stable').head(top_n)
    return [ChartPoint(name=airline, value=int(count)) for airline, count in counts.items()]


def status_distribution(flights: list) -> list:
    """Returns the On-Time / Delayed / Cancelled buckets with their display colors."""
    df = flights_to_frame(flights)
    status_counts = df['status'].value_counts()
    return [
        ChartPoint(name=status, value=int(status_counts.get(status, 0)), color=color)
        for status, color in STATUS_COLORS.items()
    ]


def average_delay(flights: list) -> float:
    """Mean delay in minutes across delayed flights, to one decimal; 0.0 when none are delayed."""
    df = flights_to_frame(flights)
    delays = df.loc[df['status'] == DELAYED, 'delay_minutes']
    if delays.empty:
        return 0.0
    return round(float(delays.mean()), 1)
