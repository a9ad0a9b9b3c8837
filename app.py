"""Entry point: ``flask --app app run`` or ``python app.py``."""

import os

from src.punch_attendance.punch_attendance.main import create_app

app = create_app()


if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "3000")))
