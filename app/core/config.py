from typing import Optional
from pydantic import AliasChoices, Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SUPABASE_DB_URL", "DATABASE_URL"),
    )
    create_tables: bool = Field(default=False, alias="DB_CREATE_TABLES")

    @computed_field
    def connection_string(self) -> Optional[str]:
        """SQLAlchemy URL with an async driver.

        Supabase hands out plain ``postgres://`` URLs; those are pointed at
        asyncpg. URLs that already name a driver are left alone.
        """
        if not self.url:
            return None
        for prefix in ("postgres://", "postgresql://"):
            if self.url.startswith(prefix):
                return "postgresql+asyncpg://" + self.url[len(prefix):]
        return self.url


class GenerationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    api_key: Optional[str] = Field(default=None, alias="OPENROUTER_API_KEY")
    model: str = Field(
        default="deepseek/deepseek-chat-v3.1:free", alias="OPENROUTER_MODEL"
    )
    base_url: str = Field(
        default="https://openrouter.ai/api/v1", alias="OPENROUTER_BASE_URL"
    )
    timeout_seconds: float = Field(default=120.0, alias="GENERATION_TIMEOUT_SECONDS")


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )
    name: str = Field(default="flashcards", alias="APP_NAME")
    version: str = Field(default="0.1.0", alias="API_VERSION")
    port: int = Field(default=10000, alias="PORT")
    mode: str = Field(default="prod", alias="MODE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @computed_field
    def is_production(self) -> bool:
        return self.mode != "dev"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    app: AppSettings = Field(default_factory=lambda: AppSettings())
    database: DatabaseSettings = Field(default_factory=lambda: DatabaseSettings())
    generation: GenerationSettings = Field(
        default_factory=lambda: GenerationSettings()
    )


settings = Settings()
