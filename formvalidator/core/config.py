from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Engine
    BLANK_ON_ERROR: bool = True  # Blank a form field in place once it fails a rule

    # Reference sets (single-row CSV files, unset = empty set)
    COUNTRY_CODES_PATH: str | None = None
    CURRENCY_CODES_PATH: str | None = None
    COMMON_PASSWORDS_PATH: str | None = None
    DISPOSABLE_DOMAINS_PATH: str | None = None
    DISPOSABLE_WILDCARDS_PATH: str | None = None

    @property
    def reference_paths(self) -> dict[str, str | None]:
        return {
            "country_codes": self.COUNTRY_CODES_PATH,
            "currency_codes": self.CURRENCY_CODES_PATH,
            "common_passwords": self.COMMON_PASSWORDS_PATH,
            "disposable_domains": self.DISPOSABLE_DOMAINS_PATH,
            "disposable_wildcards": self.DISPOSABLE_WILDCARDS_PATH,
        }

    class Config:
        env_prefix = "FORMVALIDATOR_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
