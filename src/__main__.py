import sys
from pathlib import Path

from streamlit.web import cli as stcli

from config import settings

if __name__ == "__main__":
    app_path = Path(__file__).resolve().parent / "ui" / "app.py"
    sys.argv = [
        "streamlit",
        "run",
        str(app_path),
        "--server.port",
        str(settings.streamlit_port),
    ]
    sys.exit(stcli.main())
