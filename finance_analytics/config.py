"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="FINANCE_", extra="ignore"
    )

    # Service
    service_name: str = "finance-analytics"
    log_level: str = "INFO"

    # Aggregation windows
    trailing_months: int = 6
    recent_transactions_limit: int = 5

    # Category labels
    default_category: str = "Outros"
    uncategorized_label: str = "Sem Categoria"
    default_income_source: str = "Receita"

    # Color assignment
    color_small_set_threshold: int = 12
    color_max_retries: int = 10
    color_hue_offset: int = 25  # Degrees added per collision retry


settings = Settings()
