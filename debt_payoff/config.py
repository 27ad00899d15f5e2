from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "DEBT_PAYOFF_"}

    # Simulation guardrails
    horizon_months: int = 1200  # 100 years
    max_money: Decimal = Decimal("1000000000000")

    # Request defaults
    default_strategy: str = "snowball"

    # App
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]


settings = Settings()
