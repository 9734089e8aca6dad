"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Backend API
    api_base_url: str = "http://localhost:5000/api"

    # Durable session storage
    storage_url: str = "sqlite:///./portal_session.db"

    # Service
    service_name: str = "hire-purchase-portal"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 15.0
    dashboard_timeout_seconds: float = 30.0  # Whole dashboard load, all requests together

    # Display
    currency_symbol: str = "GH₵"

    # Exports
    export_dir: str = "./exports"
    excel_column_width: int = 20
    print_command: str = "lp"
    pdf_font_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"
    pdf_bold_font_path: str = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"


settings = Settings()
