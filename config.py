import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # Remote book API
    api_base_url: str = os.getenv("BOOKDESK_API_URL", "http://localhost:8080")

    # HTTP client timeouts (seconds)
    http_timeout: float = float(os.getenv("BOOKDESK_HTTP_TIMEOUT", "5.0"))
    connect_timeout: float = float(os.getenv("BOOKDESK_CONNECT_TIMEOUT", "5.0"))

    # CLI output: plain | json | rich
    output_mode: str = os.getenv("BOOKDESK_OUTPUT", "plain")
    log_level: str = os.getenv("BOOKDESK_LOG_LEVEL", "WARNING")

    # Application
    app_name: str = os.getenv("APP_NAME", "Book Desk")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")


settings = Settings()
