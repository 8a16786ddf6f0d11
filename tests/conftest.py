import datetime as dt

import pytest

from core.schema import FlightRecord

BASE_TIME = dt.datetime(2026, 3, 1, 8, 0, tzinfo=dt.timezone.utc)


def make_flight(flight_id="FL-TEST", status="On-Time", delay_minutes=0, airline="Emirates",
                departure_airport="Dubai (DXB)", arrival_airport="London (LHR)",
                flight_number="EM100", predicted_risk="Low", departure_time=BASE_TIME):
    return FlightRecord(
        id=flight_id,
        flight_number=flight_number,
        airline=airline,
        departure_airport=departure_airport,
        arrival_airport=arrival_airport,
        departure_time=departure_time,
        arrival_time=departure_time + dt.timedelta(hours=7),
        status=status,
        delay_minutes=delay_minutes,
        aircraft_type="Boeing 777",
        ticket_price=650,
        passenger_count=220,
        predicted_risk=predicted_risk,
    )


@pytest.fixture
def flight_factory():
    return make_flight


class ScriptedRandom:
    """Stands in for numpy's Generator: replays `random()` draws, `integers()` returns `low`."""

    def __init__(self, draws=()):
        self.draws = list(draws)

    def random(self):
        return self.draws.pop(0)

    def integers(self, low, high):
        return low


@pytest.fixture
def scripted_random():
    return ScriptedRandom
