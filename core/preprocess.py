import dataclasses

import pandas as pd

from core.schema import FlightRecord

FLIGHT_COLUMNS = [field.name for field in dataclasses.fields(FlightRecord)]


def short_airport_name(airport: str) -> str:
    """'Dubai (DXB)' -> 'Dubai'."""
    return airport.split(' ')[0] if airport else airport


def flights_to_frame(flights: list) -> pd.DataFrame:
    """
    Converts flight records into a DataFrame for aggregation and display.

    Row order follows the input list. An empty list still yields every column,
    so downstream groupbys work on it.

    Args:
        flights: A list of FlightRecord objects.

    Returns:
        A DataFrame with one column per record field plus:
        - departure_date
        - departure_hour
        - route (short origin -> short destination)
    """
    df = pd.DataFrame([dataclasses.asdict(f) for f in flights], columns=FLIGHT_COLUMNS)

    df['departure_time'] = pd.to_datetime(df['departure_time'], utc=True)
    df['arrival_time'] = pd.to_datetime(df['arrival_time'], utc=True)
    df['delay_minutes'] = pd.to_numeric(df['delay_minutes']).fillna(0).astype(int)

    df['departure_date'] = df['departure_time'].dt.date
    df['departure_hour'] = df['departure_time'].dt.hour
    df['route'] = (df['departure_airport'].astype(str).map(short_airport_name) + ' → '
                   + df['arrival_airport'].astype(str).map(short_airport_name))
    return df
