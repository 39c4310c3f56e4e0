from src.hr_timekeeping.hr_timekeeping.main import create_app, start_background_jobs

app = create_app()

if __name__ == "__main__":
    start_background_jobs(app)
    # The reloader would run a second scheduler in its child process.
    app.run(debug=bool(app.config.get("DEBUG", False)), use_reloader=False)
