import datetime as dt

from core.export import export_csv, flights_to_csv
from conftest import make_flight


def test_csv_header_and_row():
    flight = make_flight(status="Delayed", delay_minutes=45, departure_time=dt.datetime(2026, 3, 9, 22, 30, tzinfo=dt.timezone.utc))
    lines = flights_to_csv([flight]).splitlines()
    assert lines[0] == "Flight Number,Airline,From,To,Date,Status,Delay"
    assert lines[1] == "EM100,Emirates,Dubai (DXB),London (LHR),3/9/2026,Delayed,45"


def test_csv_of_empty_list_is_header_only():
    assert flights_to_csv([]).splitlines() == ["Flight Number,Airline,From,To,Date,Status,Delay"]


def test_export_writes_file(tmp_path):
    out = tmp_path / "exports" / "flight_data.csv"
    export_csv([make_flight(flight_id="A"), make_flight(flight_id="B")], str(out))
    assert len(out.read_text().splitlines()) == 3
