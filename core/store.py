import json
import os
import tempfile

from core.generate import generate_mock_flights
from core.schema import FlightRecord

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
OUTPUT_PATH = os.path.join(PROJECT_ROOT, 'outputs')
DEFAULT_STORE_PATH = os.path.join(OUTPUT_PATH, 'flights_store.json')

STORAGE_KEY = 'flights'
DEFAULT_RESET_SIZE = 80


class StorageError(Exception):
    """Raised when the persisted flight slot cannot be read or written."""


# --- Collection transforms ---

def prepend_flight(flights: list, record: FlightRecord) -> list:
    """Returns a new list with `record` in front; newest additions come first."""
    return [record] + list(flights)


def remove_flight(flights: list, flight_id: str) -> list:
    """Returns a new list without the record `flight_id`. Unknown ids leave the list unchanged."""
    return [f for f in flights if f.id != flight_id]


# --- Storage backends ---

class MemoryStorage:
    """Dict-backed key-value slots. Nothing survives the process."""

    def __init__(self, initial: dict = None):
        self._slots = dict(initial or {})

    def read(self, key: str):
        return self._slots.get(key)

    def write(self, key: str, value):
        self._slots[key] = value


class JsonFileStorage:
    """
    Key-value slots kept in a single JSON object on disk.

    Each write rewrites the whole file, so the file always holds the latest
    state of every slot.
    """

    def __init__(self, path: str = DEFAULT_STORE_PATH):
        self.path = path

    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Could not read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Expected a JSON object in {self.path}, found {type(data).__name__}")
        return data

    def read(self, key: str):
        return self._read_all().get(key)

    def write(self, key: str, value):
        data = self._read_all()
        data[key] = value
        try:
            text = json.dumps(data)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Could not serialize slot '{key}': {e}") from e

        # Write beside the target and swap it in, so a failure never truncates the saved file
        directory = os.path.dirname(self.path) or '.'
        tmp_path = None
        try:
            if not os.path.exists(directory):
                os.makedirs(directory)
            fd, tmp_path = tempfile.mkstemp(prefix='.flights-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f"Could not write {self.path}: {e}") from e


# --- Record store ---

class FlightStore:
    """
    Holds the current flight collection and keeps it in sync with storage.

    The collection is hydrated on the first `list()` call, from the storage
    slot if it holds data or from a freshly generated batch otherwise. Each
    mutation replaces the collection and then persists it.

    If storage fails the store keeps working in memory only: `persistent`
    turns False and `last_error` holds the failure. A failed write from
    `add`, `delete` or `reset` still raises StorageError so the caller knows
    the change will not survive a restart.
    """

    def __init__(self, storage=None, generator=generate_mock_flights, reset_size: int = DEFAULT_RESET_SIZE,
                 key: str = STORAGE_KEY):
        self.storage = storage if storage is not None else JsonFileStorage()
        self.generator = generator
        self.reset_size = reset_size
        self.key = key
        self.last_error = None
        self._flights = None
        self._persistent = True

    @property
    def persistent(self) -> bool:
        return self._persistent

    def _fall_back_to_memory(self, error: StorageError):
        self._persistent = False
        self.last_error = error
        print(f"Warning: {error}. Continuing in memory only; changes will not survive a restart.")

    def _load(self):
        try:
            stored = self.storage.read(self.key)
            if stored is None:
                return None
            if not isinstance(stored, list):
                raise StorageError(f"Slot '{self.key}' does not hold a list of flights")
            try:
                return [FlightRecord.from_dict(item) for item in stored]
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise StorageError(f"Slot '{self.key}' holds a malformed flight record: {e}") from e
        except StorageError as e:
            self._fall_back_to_memory(e)
            return None

    def _persist(self):
        if not self._persistent:
            return
        try:
            self.storage.write(self.key, [f.to_dict() for f in self._flights])
        except StorageError as e:
            self._fall_back_to_memory(e)
            raise

    def list(self):
        """Returns a copy of the current collection, hydrating it on first use."""
        if self._flights is None:
            flights = self._load()
            if flights is None:
                self._flights = self.generator(self.reset_size)
                try:
                    self._persist()
                except StorageError:
                    # Already recorded in last_error; reads keep working in memory.
                    pass
            else:
                self._flights = flights
        return list(self._flights)

    def add(self, record: FlightRecord):
        self._flights = prepend_flight(self.list(), record)
        self._persist()
        return list(self._flights)

    def delete(self, flight_id: str):
        self._flights = remove_flight(self.list(), flight_id)
        self._persist()
        return list(self._flights)

    def reset(self):
        """Discards every record and replaces the collection with a fresh batch."""
        self._flights = self.generator(self.reset_size)
        self._persist()
        return list(self._flights)

    def close(self):
        """Drops the in-memory collection; the next `list()` hydrates again."""
        self._flights = None
