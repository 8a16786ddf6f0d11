import os

import pandas as pd

from core.preprocess import flights_to_frame

EXPORT_COLUMNS = {
    'flight_number': 'Flight Number',
    'airline': 'Airline',
    'departure_airport': 'From',
    'arrival_airport': 'To',
    'departure_time': 'Date',
    'status': 'Status',
    'delay_minutes': 'Delay',
}


def _format_date(ts: pd.Timestamp) -> str:
    return f"{ts.month}/{ts.day}/{ts.year}"


def flights_to_csv(flights: list) -> str:
    """
    Serializes the export column subset of every flight as CSV text.

    The date column is the departure date as M/D/YYYY.
    """
    df = flights_to_frame(flights)
    export_df = df[list(EXPORT_COLUMNS)].copy()
    export_df['departure_time'] = export_df['departure_time'].map(_format_date)
    export_df = export_df.rename(columns=EXPORT_COLUMNS)
    return export_df.to_csv(index=False, lineterminator='\n')


def export_csv(flights: list, output_path: str) -> str:
    """Writes the CSV export to `output_path` and returns the path."""
    directory = os.path.dirname(output_path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory)
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(flights_to_csv(flights))
    print(f"Saved {len(flights)} flights to {output_path}")
    return output_path
