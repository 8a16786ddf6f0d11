from app.actions import run_mutation
from core.store import StorageError


def test_successful_mutation_returns_true():
    calls = []
    messages = []
    assert run_mutation(calls.append, "FL-1", report=messages.append) is True
    assert calls == ["FL-1"]
    assert messages == []


def test_storage_failure_is_reported_and_returns_false():
    def failing(flight_id):
        raise StorageError("disk full")

    messages = []
    assert run_mutation(failing, "FL-1", report=messages.append) is False
    assert messages == ["Could not save changes: disk full"]
