import os
import sys

from app.server import PROJECT_ROOT, build_command, build_env


def test_command_runs_streamlit_with_this_interpreter():
    assert build_command("ui.py") == [sys.executable, "-m", "streamlit", "run", "ui.py"]
    assert build_command("ui.py", 8600)[-2:] == ["--server.port", "8600"]


def test_env_puts_project_root_first(monkeypatch):
    monkeypatch.setenv("PYTHONPATH", "/opt/extra")
    assert build_env()["PYTHONPATH"].split(os.pathsep) == [PROJECT_ROOT, "/opt/extra"]
