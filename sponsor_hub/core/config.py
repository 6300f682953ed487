from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    APP_NAME: str = "SponsorHub"
    APP_ENV: str = "dev"
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000

    SECRET_KEY: str = "change_me_please"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    BCRYPT_ROUNDS: int = 12

    # Failed logins before the account is locked, and for how long
    LOGIN_MAX_ATTEMPTS: int = 5
    LOGIN_LOCK_MINUTES: int = 15

    # Where /auth/confirm_email sends the browser once the address is confirmed
    CONFIRM_REDIRECT_URL: str = "/"

    # SQLite by default; any SQLAlchemy URL works (postgresql+psycopg://...)
    DATABASE_URL: str = "sqlite:///./sponsor_hub.db"

    BACKEND_CORS_ORIGINS: str = "http://localhost:5173"

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"  # "text" or "json"

settings = Settings()
