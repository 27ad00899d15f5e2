"""FastAPI dependency injection."""

from debt_payoff.config import Settings, settings


def get_settings() -> Settings:
    return settings
