"""Development entry point: ``python app.py`` or ``flask --app app run``."""

from src.volunteer_hub.volunteer_hub.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=bool(app.config.get("DEBUG")))
