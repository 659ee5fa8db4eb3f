#setup: python -m venv .venv
#setup: source .venv/bin/activate   # (windows: .venv\Scripts\activate)
#setup: pip install -U pip -e ".[test]"
#setup: flask --app investcalc.wsgi run --port 5001 --debug

from investcalc.app import create_app
from investcalc.config import Settings

settings = Settings.from_env()
app = create_app(settings)


if __name__ == "__main__":
    app.run(port=settings.port, debug=True)
