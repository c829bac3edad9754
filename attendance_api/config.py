import os


class Config:
    """Base configuration loaded from environment variables."""

    # --- General ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv(
        "LOG_FILE", os.path.join(os.path.dirname(__file__), "..", "logs", "app.log")
    )
    PORT = int(os.getenv("PORT", "3000"))

    # --- Google Sheets ---
    SPREADSHEET_ID = os.getenv("SPREADSHEET_ID", "1HRPzyWjgxLh_JLyM0EHs7scenOwMhzGOFlZnYf_CnpM")
    GOOGLE_SERVICE_ACCOUNT_JSON = os.getenv(
        "GOOGLE_SERVICE_ACCOUNT_JSON", os.getenv("GOOGLE_CREDENTIALS", "")
    )

    # --- Misc ---
    DEBUG = os.getenv("FLASK_DEBUG", "False").lower() == "true"
