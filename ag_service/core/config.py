# ag_service/core/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the environment (Docker Compose passes the root .env);
    # a local .env is picked up when running outside containers.
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    DATABASE_URL_PROD: str = "postgresql://postgres:postgres@db:5432/ifmsa_ag"
    DATABASE_URL_LOCAL: str = "sqlite:///./ag_service.db"

    JWT_SECRET: str = "change-me"
    LOG_LEVEL: str = "INFO"

    # Comma separated list of allowed frontend origins
    CORS_ORIGINS: str = "http://localhost:3000"

    # A modality is reported as "near full" at this share of its capacity
    NEAR_FULL_RATIO: float = 0.9

    # Timestamps in spreadsheet exports are rendered in this zone
    REPORT_TIMEZONE: str = "America/Sao_Paulo"

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Create a single instance of the settings
settings = Settings()
