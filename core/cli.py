# cli.py
import os
import sys

from core.export import export_csv
from core.kpis import compute_stats
from core.store import FlightStore, JsonFileStorage, StorageError, OUTPUT_PATH
from core.visualize import save_dashboard_plots

USAGE = "Usage: python -m core.cli <flights_store.json> [stats | reset | export <out.csv> | plots <dir>]"


def print_stats(flights):
    stats = compute_stats(flights)
    print("\n--- Flight Operations Summary ---")
    print(f"Total flights:        {stats.total_flights}")
    print(f"Delayed:              {stats.total_delays}")
    print(f"Cancelled:            {stats.total_cancellations}")
    print(f"On-time performance:  {stats.on_time_performance}%")
    print(f"Most active airport:  {stats.most_active_airport}")
    print(f"Most delayed airline: {stats.most_delayed_airline}")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 1:
        print(USAGE)
        return 1

    store = FlightStore(JsonFileStorage(argv[0]))
    command = argv[1] if len(argv) > 1 else 'stats'

    try:
        if command == 'stats':
            print_stats(store.list())
        elif command == 'reset':
            flights = store.reset()
            print(f"✅ Store reset with {len(flights)} fresh flights")
        elif command == 'export':
            out_path = argv[2] if len(argv) > 2 else os.path.join(OUTPUT_PATH, 'flight_data.csv')
            export_csv(store.list(), out_path)
        elif command == 'plots':
            plots_dir = argv[2] if len(argv) > 2 else os.path.join(OUTPUT_PATH, 'plots')
            save_dashboard_plots(store.list(), plots_dir)
        else:
            print(f"Unknown command: {command}")
            print(USAGE)
            return 1
    except StorageError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
