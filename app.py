"""Development entry point: ``flask --app app run`` or ``python app.py``."""
import os

from src.staff_scheduler.staff_scheduler.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "5000")), debug=app.config["DEBUG"])
