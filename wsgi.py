"""WSGI entry point for production servers (e.g. ``gunicorn wsgi:app``)."""

from src.hr_timekeeping.hr_timekeeping.main import create_app, start_background_jobs

app = create_app()
start_background_jobs(app)
