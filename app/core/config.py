from typing import Optional
from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    base_url: str = Field(
        default="https://generativelanguage.googleapis.com", alias="GEMINI_BASE_URL"
    )
    model: str = Field(default="gemini-1.5-flash", alias="GEMINI_MODEL")
    timeout: float = Field(default=60.0, alias="GEMINI_TIMEOUT")


class OpenAISettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    base_url: str = Field(default="https://api.openai.com", alias="OPENAI_BASE_URL")
    model: str = Field(default="gpt-4o-mini", alias="OPENAI_MODEL")
    temperature: float = Field(default=0.7, alias="OPENAI_TEMPERATURE")
    max_tokens: int = Field(default=4000, alias="OPENAI_MAX_TOKENS")
    timeout: float = Field(default=60.0, alias="OPENAI_TIMEOUT")


class SessionSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    idle_seconds: int = Field(default=3600, alias="SESSION_IDLE_SECONDS")
    sweep_interval: int = Field(default=60, alias="SESSION_SWEEP_INTERVAL")


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="learniverse", alias="APP_NAME")
    version: str = Field(default="v1", alias="API_VERSION")
    port: int = Field(default=9000, alias="APP_PORT")
    mode: str = Field(default="prod", alias="MODE")
    log_level: Optional[str] = Field(default=None, alias="LOG_LEVEL")
    # JSON list in the environment, e.g. CORS_ORIGINS='["https://app.example"]'
    cors_origins: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173",
            "http://localhost:8080",
        ],
        alias="CORS_ORIGINS",
    )

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    gemini: GeminiSettings = Field(default_factory=lambda: GeminiSettings())
    openai: OpenAISettings = Field(default_factory=lambda: OpenAISettings())
    sessions: SessionSettings = Field(default_factory=lambda: SessionSettings())

    # Provider used when a request does not name one: "gemini" or "openai"
    default_provider: str = Field(default="gemini", alias="DEFAULT_PROVIDER")


settings = Settings()
