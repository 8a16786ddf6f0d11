import streamlit as st

from core.store import StorageError


def run_mutation(action, *args, report=None):
    """
    Runs a store mutation for a page callback.

    Returns True when the change was saved. On a storage failure the error is
    shown through `report` (default `st.error`) and False is returned, so the
    page stays put instead of rerunning over the message.
    """
    report = st.error if report is None else report
    try:
        action(*args)
    except StorageError as e:
        report(f"Could not save changes: {e}")
        return False
    return True
