from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # App
    app_title: str = "Mortgage Scenario Comparison"
    debug: bool = False
    log_level: str = "INFO"

    # Servers
    api_port: int = 8000
    dashboard_port: int = 8050
    cors_allow_origins: list[str] = ["*"]

    # Display
    currency_symbol: str = "$"


settings = Settings()
