
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "HotelHub API"
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = "changeme"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 8

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "hotelhub"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # Booking holds
    HOLD_DURATION_SECONDS: int = 15 * 60
    HOLD_SWEEP_ENABLED: bool = True
    HOLD_SWEEP_INTERVAL_SECONDS: int = 60

    # Tenant routing: "<slug>.<PLATFORM_DOMAIN>" resolves to a hotel,
    # "admin.<PLATFORM_DOMAIN>" to the platform console.
    PLATFORM_DOMAIN: str = "luxuryhotelsaas.com"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
