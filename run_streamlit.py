"""
Launcher script for the YouTube Video Analyzer Streamlit app.
"""

import os
import argparse
import subprocess
import sys
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def main():
    """Launch the Streamlit front-end pointed at a running API server."""
    parser = argparse.ArgumentParser(description="YouTube Video Analyzer Streamlit App")
    parser.add_argument("--port", type=int, default=8501, help="Port to run Streamlit on")
    parser.add_argument("--api-url", default=os.getenv("API_URL", "http://localhost:8000"),
                        help="URL of the API server")
    args = parser.parse_args()

    project_dir = Path(__file__).parent.absolute()
    app_path = project_dir / "video_analyzer" / "frontend" / "streamlit_app.py"

    env = os.environ.copy()
    env["API_URL"] = args.api_url
    # streamlit runs the file as a script, so the package must be importable
    env["PYTHONPATH"] = str(project_dir) + os.pathsep + env.get("PYTHONPATH", "")

    print(f"Starting Streamlit front-end on port {args.port} (API: {args.api_url})")

    cmd = [
        "streamlit", "run", str(app_path),
        "--server.port", str(args.port),
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
    ]

    try:
        subprocess.run(cmd, env=env, check=True)
    except KeyboardInterrupt:
        print("Streamlit app stopped")
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"Error running Streamlit app: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
