"""Entry point for running the attendance API locally."""

from attendance_api import create_app

app = create_app()


if __name__ == "__main__":
    app.logger.info("Attendance API is running on port %s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["DEBUG"])
