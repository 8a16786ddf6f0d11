import os
import subprocess
import sys

APP_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(APP_DIR)


def build_command(ui_path, port=None):
    command = [sys.executable, "-m", "streamlit", "run", ui_path]
    if port is not None:
        command += ["--server.port", str(port)]
    return command


def build_env():
    """Copies the environment with the project root on PYTHONPATH so ui.py can import `core`."""
    env = dict(os.environ)
    paths = [PROJECT_ROOT] + [p for p in env.get("PYTHONPATH", "").split(os.pathsep) if p]
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


def run_streamlit(port=None):
    """
    Launches the dashboard in ui.py with Streamlit.
    """
    ui_path = os.path.join(APP_DIR, "ui.py")

    if not os.path.exists(ui_path):
        print(f"Error: ui.py not found at {ui_path}")
        sys.exit(1)

    print(f"Launching flight dashboard from: {ui_path}")

    try:
        subprocess.run(build_command(ui_path, port), check=True, cwd=PROJECT_ROOT, env=build_env())
    except FileNotFoundError:
        print("Error: 'streamlit' command not found.")
        print("Please make sure Streamlit is installed correctly ('pip install streamlit').")
    except subprocess.CalledProcessError as e:
        print(f"An error occurred while running the Streamlit app: {e}")


if __name__ == "__main__":
    run_streamlit(sys.argv[1] if len(sys.argv) > 1 else None)
