from datetime import date
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import BeforeValidator, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


def parse_weekdays(v: Any) -> list[int] | Any:
    if isinstance(v, str) and not v.startswith("["):
        return [int(i.strip()) for i in v.split(",") if i.strip()]
    return v


def parse_holidays(v: Any) -> list[date] | Any:
    if isinstance(v, str) and not v.startswith("["):
        return [date.fromisoformat(i.strip()) for i in v.split(",") if i.strip()]
    return v


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCHEDULING_",
        env_ignore_empty=True,
        extra="ignore",
    )
    PROJECT_NAME: str = "engineering-scheduling"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Persistence
    DATABASE_URL: str = "sqlite://"
    DATABASE_ECHO: bool = False

    # Working-day calendar (0=Monday, 6=Sunday)
    WORKING_WEEKDAYS: Annotated[list[int] | str, BeforeValidator(parse_weekdays)] = [
        0,
        1,
        2,
        3,
        4,
    ]
    HOLIDAYS: Annotated[list[date] | str, BeforeValidator(parse_holidays)] = []

    # Resource defaults
    DEFAULT_DAILY_CAPACITY: float = 8.0
    RESOURCE_CODE_SEQUENCE_WIDTH: int = 4
    CERTIFICATION_EXPIRY_WARNING_DAYS: int = 30

    # Observability Configuration
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"
    LOG_SQL: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def holiday_set(self) -> frozenset[date]:
        return frozenset(self.HOLIDAYS)

    @model_validator(mode="after")
    def _check_calendar(self) -> Self:
        for weekday in self.WORKING_WEEKDAYS:
            if not 0 <= weekday <= 6:
                raise ValueError(
                    f"Invalid weekday: {weekday}. Must be 0-6 (Monday=0, Sunday=6)"
                )
        if self.DEFAULT_DAILY_CAPACITY <= 0:
            raise ValueError("DEFAULT_DAILY_CAPACITY must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
