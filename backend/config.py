"""Application configuration using pydantic-settings."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_TRACKED_SYMBOLS = [
    "JKH",
    "COMB",
    "HNB",
    "DIAL",
    "SAMP",
    "LFIN",
    "NTB",
    "CINS",
    "BIL",
    "VONE",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (empty string disables the persisted store)
    DATABASE_URL: str = "sqlite:///./portfolio.db"

    # Colombo Stock Exchange bulk trade summary endpoint
    CSE_API_URL: str = "https://www.cse.lk/api/tradeSummary"
    CSE_TIMEOUT_SECONDS: float = 30.0
    TRACKED_SYMBOLS: list[str] = DEFAULT_TRACKED_SYMBOLS

    # App settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    @field_validator("TRACKED_SYMBOLS", mode="after")
    @classmethod
    def normalize_tracked_symbols(cls, v: list[str]) -> list[str]:
        """Uppercase and de-duplicate tracked codes, keeping their order."""
        seen: list[str] = []
        for symbol in v:
            code = symbol.strip().upper()
            if code and code not in seen:
                seen.append(code)
        return seen

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize LOG_LEVEL to an uppercase Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}, got {v!r}")
        return v.upper()


settings = Settings()
