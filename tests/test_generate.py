import datetime as dt

import numpy as np
import pytest

import core.generate as generate
from core.generate import ConfigurationError, calculate_risk, generate_mock_flights, new_manual_flight

NOW = dt.datetime(2026, 6, 1, 12, 0, tzinfo=dt.timezone.utc)


def test_risk_high_when_delay_over_an_hour_regardless_of_airline(scripted_random):
    # No draws scripted: the airline rule must not be reached.
    assert calculate_risk("Air India", 90, scripted_random()) == "High"
    assert calculate_risk("Delta", 61, scripted_random()) == "High"


def test_risk_prone_airline_medium_on_high_draw(scripted_random):
    assert calculate_risk("Lufthansa", 0, scripted_random([0.9])) == "Medium"


def test_risk_prone_airline_falls_through_on_low_draw(scripted_random):
    assert calculate_risk("Air India", 0, scripted_random([0.3])) == "Low"
    assert calculate_risk("Air India", 30, scripted_random([0.1])) == "Medium"


def test_risk_by_delay_for_other_airlines(scripted_random):
    assert calculate_risk("Emirates", 30, scripted_random()) == "Medium"
    assert calculate_risk("Emirates", 15, scripted_random()) == "Low"
    assert calculate_risk("Emirates", 0, scripted_random()) == "Low"


def test_generates_requested_count():
    assert len(generate_mock_flights(25, rng=np.random.default_rng(1), now=NOW)) == 25
    assert generate_mock_flights(0, rng=np.random.default_rng(1), now=NOW) == []


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        generate_mock_flights(-1)


def test_generated_flights_respect_invariants():
    flights = generate_mock_flights(500, rng=np.random.default_rng(7), now=NOW)

    for f in flights:
        assert f.departure_airport != f.arrival_airport
        assert f.airline in generate.AIRLINES
        assert f.aircraft_type in generate.AIRCRAFT
        assert NOW - dt.timedelta(days=7) <= f.departure_time <= NOW + dt.timedelta(days=2)
        hours = (f.arrival_time - f.departure_time).total_seconds() / 3600
        assert 2 <= hours <= 13
        if f.status == "Delayed":
            assert 15 <= f.delay_minutes < 195
        else:
            assert f.delay_minutes == 0
        assert 300 <= f.ticket_price < 1800
        assert 100 <= f.passenger_count < 400
        assert f.id.startswith("FL-") and len(f.id) == 12
        assert f.flight_number.startswith(f.airline[:2].upper())
        if f.delay_minutes > 60:
            assert f.predicted_risk == "High"


def test_all_statuses_appear_in_a_large_batch():
    flights = generate_mock_flights(500, rng=np.random.default_rng(3), now=NOW)
    assert {f.status for f in flights} == {"On-Time", "Delayed", "Cancelled"}


def test_seeded_generation_is_repeatable():
    first = generate_mock_flights(10, rng=np.random.default_rng(11), now=NOW)
    second = generate_mock_flights(10, rng=np.random.default_rng(11), now=NOW)
    assert first == second


def test_single_airport_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(generate, "AIRPORTS", ["Dubai (DXB)", "Dubai (DXB)"])
    with pytest.raises(ConfigurationError):
        generate_mock_flights(5)


def test_manual_flight_defaults():
    flight = new_manual_flight("Emirates", "Dubai (DXB)", "London (LHR)", rng=np.random.default_rng(0), now=NOW)
    assert flight.id.startswith("FL-MANUAL-")
    assert flight.flight_number == "XX999"
    assert flight.arrival_time - flight.departure_time == dt.timedelta(hours=4)
    assert flight.status == "On-Time"
    assert flight.predicted_risk == "Low"


def test_manual_cancelled_flight_drops_delay(scripted_random):
    flight = new_manual_flight("Delta", "Dubai (DXB)", "London (LHR)", status="Cancelled",
                               delay_minutes=40, rng=scripted_random(), now=NOW)
    assert flight.delay_minutes == 0


def test_manual_delayed_flight_gets_risk():
    flight = new_manual_flight("Delta", "Dubai (DXB)", "London (LHR)", status="Delayed",
                               delay_minutes=120, rng=np.random.default_rng(0), now=NOW)
    assert flight.predicted_risk == "High"
