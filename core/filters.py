from core.schema import FilterSpec, FlightRecord, ALL


def matches(flight: FlightRecord, spec: FilterSpec) -> bool:
    """
    True if the flight passes every part of the filter.

    The search term matches case-insensitively anywhere in the flight number
    or either airport name; an empty term matches everything. Status and
    airline must match exactly unless set to 'All'.
    """
    term = spec.search_term.lower()
    matches_search = (
        term in flight.flight_number.lower()
        or term in flight.departure_airport.lower()
        or term in flight.arrival_airport.lower()
    )
    matches_status = spec.status == ALL or flight.status == spec.status
    matches_airline = spec.airline == ALL or flight.airline == spec.airline

    return matches_search and matches_status and matches_airline


def filter_flights(flights: list, spec: FilterSpec) -> list:
    return [f for f in flights if matches(f, spec)]


def critical_alerts(flights: list, threshold: int = 60, limit: int = 5) -> list:
    """The first `limit` flights delayed by more than `threshold` minutes, in collection order."""
    return [f for f in flights if f.delay_minutes > threshold][:limit]


def airline_options(flights: list) -> list:
    """Choices for the airline drop-down: 'All' followed by each airline in order of first appearance."""
    return [ALL] + list(dict.fromkeys(f.airline for f in flights))
