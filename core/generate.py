from datetime import datetime, timedelta, timezone

import numpy as np

from core.schema import FlightRecord, ON_TIME, DELAYED, CANCELLED

AIRLINES = ['Emirates', 'Air India', 'British Airways', 'Qatar Airways', 'Lufthansa', 'Singapore Airlines', 'Delta', 'United']
AIRPORTS = ['Mumbai (BOM)', 'Dubai (DXB)', 'London (LHR)', 'Doha (DOH)', 'Frankfurt (FRA)', 'Singapore (SIN)', 'New York (JFK)', 'Tokyo (HND)']
AIRCRAFT = ['Boeing 777', 'Airbus A380', 'Airbus A320', 'Boeing 787', 'Airbus A350']

# Departure window relative to generation time
DAYS_BACK = 7
DAYS_AHEAD = 2

CANCELLED_ABOVE = 0.85
DELAYED_ABOVE = 0.65

RISK_PRONE_AIRLINES = ('Air India', 'Lufthansa')
RISK_DRAW_THRESHOLD = 0.6

_TOKEN_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ'


class ConfigurationError(ValueError):
    """Raised when the generator's enumerations cannot produce valid flights."""


def _pick(rng, options):
    return options[int(rng.integers(0, len(options)))]


def _token(rng, length: int) -> str:
    return ''.join(_pick(rng, _TOKEN_ALPHABET) for _ in range(length))


def calculate_risk(airline: str, delay_minutes: int, rng=None) -> str:
    """
    Mock delay-risk classifier.

    The airline rule draws from `rng`, so repeated calls with the same inputs
    may disagree for Air India and Lufthansa flights delayed by 60 minutes or less.
    """
    if rng is None:
        rng = np.random.default_rng()

    if delay_minutes > 60:
        return 'High'
    if airline in RISK_PRONE_AIRLINES and rng.random() > RISK_DRAW_THRESHOLD:
        return 'Medium'
    if delay_minutes > 15:
        return 'Medium'
    return 'Low'


def check_configuration(airports=None):
    """Fails fast if arrival airports cannot be drawn distinct from departures."""
    airports = AIRPORTS if airports is None else airports
    if len(set(airports)) < 2:
        raise ConfigurationError(f"At least two distinct airports are required, got {list(airports)}")


def generate_mock_flights(count: int = 100, rng=None, now: datetime = None) -> list:
    """
    Generates a random set of plausible flight records.

    Args:
        count: Number of flights to generate.
        rng: Random source with `random()` and `integers(low, high)`.
             Defaults to a fresh `numpy.random.default_rng()`.
        now: Reference time for the departure window. Defaults to the current UTC time.

    Returns:
        A list of FlightRecord objects.
    """
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    check_configuration()

    if rng is None:
        rng = np.random.default_rng()
    if now is None:
        now = datetime.now(timezone.utc)

    window_start = now - timedelta(days=DAYS_BACK)
    window_seconds = timedelta(days=DAYS_BACK + DAYS_AHEAD).total_seconds()

    flights = []
    for _ in range(count):
        airline = _pick(rng, AIRLINES)
        dep_airport = _pick(rng, AIRPORTS)
        arr_airport = _pick(rng, AIRPORTS)
        while arr_airport == dep_airport:
            arr_airport = _pick(rng, AIRPORTS)

        departure_time = window_start + timedelta(seconds=rng.random() * window_seconds)
        duration_hours = 2 + int(rng.integers(0, 12))
        arrival_time = departure_time + timedelta(hours=duration_hours)

        rand = rng.random()
        if rand > CANCELLED_ABOVE:
            status, delay_minutes = CANCELLED, 0
        elif rand > DELAYED_ABOVE:
            status, delay_minutes = DELAYED, 15 + int(rng.integers(0, 180))
        else:
            status, delay_minutes = ON_TIME, 0

        flights.append(FlightRecord(
            id=f"FL-{_token(rng, 9)}",
            flight_number=f"{airline[:2].upper()}{100 + int(rng.integers(0, 900))}",
            airline=airline,
            departure_airport=dep_airport,
            arrival_airport=arr_airport,
            departure_time=departure_time,
            arrival_time=arrival_time,
            status=status,
            delay_minutes=delay_minutes,
            aircraft_type=_pick(rng, AIRCRAFT),
            ticket_price=300 + int(rng.integers(0, 1500)),
            passenger_count=100 + int(rng.integers(0, 300)),
            predicted_risk=calculate_risk(airline, delay_minutes, rng),
        ))
    return flights


def new_manual_flight(airline: str, departure_airport: str, arrival_airport: str, status: str = ON_TIME,
                      delay_minutes: int = 0, flight_number: str = 'XX999', aircraft_type: str = 'Boeing 777',
                      ticket_price: float = 500, passenger_count: int = 150, rng=None,
                      now: datetime = None) -> FlightRecord:
    """Builds a single record from the admin form: departs now, lands four hours later."""
    if rng is None:
        rng = np.random.default_rng()
    if now is None:
        now = datetime.now(timezone.utc)

    if status != DELAYED:
        delay_minutes = 0

    return FlightRecord(
        id=f"FL-MANUAL-{_token(rng, 5)}",
        flight_number=flight_number,
        airline=airline,
        departure_airport=departure_airport,
        arrival_airport=arrival_airport,
        departure_time=now,
        arrival_time=now + timedelta(hours=4),
        status=status,
        delay_minutes=int(delay_minutes),
        aircraft_type=aircraft_type,
        ticket_price=ticket_price,
        passenger_count=passenger_count,
        predicted_risk=calculate_risk(airline, delay_minutes, rng),
    )


if __name__ == '__main__':
    flights = generate_mock_flights(10)
    print("\nFirst 5 generated flights:")
    for flight in flights[:5]:
        print(f"{flight.flight_number:<8} {flight.departure_airport:>16} -> {flight.arrival_airport:<16} "
              f"{flight.status:<10} {flight.delay_minutes:>4} min  risk={flight.predicted_risk}")
