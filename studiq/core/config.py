from typing import Optional

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="studiq", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class GeminiSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    model: str = Field(default="gemini-3-flash-preview", alias="GEMINI_MODEL")
    temperature: Optional[float] = Field(default=None, alias="GEMINI_TEMPERATURE")


class StudySettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    # Directory for the persisted user record; in-memory only when unset
    data_dir: Optional[str] = Field(default=None, alias="STUDIQ_DATA_DIR")
    timer_interval: float = Field(default=1.0, alias="STUDIQ_TIMER_INTERVAL")
    idle_seconds: int = Field(default=3600, alias="STUDIQ_IDLE_SECONDS")
    sweep_interval: int = Field(default=60, alias="STUDIQ_SWEEP_INTERVAL")
    quiz_size: int = Field(default=5, alias="STUDIQ_QUIZ_SIZE")
    deck_size: int = Field(default=6, alias="STUDIQ_DECK_SIZE")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    gemini: GeminiSettings = Field(default_factory=lambda: GeminiSettings())
    study: StudySettings = Field(default_factory=lambda: StudySettings())


settings = Settings()
