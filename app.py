"""Run the local employee panel (JSON API for the kiosk front-end)."""

from src.timeclock.timeclock.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host=app.config["PANEL_HOST"], port=app.config["PANEL_PORT"], threaded=True)
