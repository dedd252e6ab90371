from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./stayfinder.db"

    # Used to VERIFY the bearer tokens that identify the current user
    SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Page size for listing and reservation queries
    LISTINGS_BATCH: int = 16

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env")


settings = Settings()
