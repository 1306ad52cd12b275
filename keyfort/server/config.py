from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # --- Basics ---
    PROJECT_NAME: str = "KeyFort Server"
    API_V1_STR: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # --- Security (JWT) ---
    # Signs login tokens. The default is for development only; set a long
    # random value in production.
    SECRET_KEY: str = "INSECURE_DEFAULT_KEY_PLEASE_CHANGE_ME"
    ALGORITHM: str = "HS256"
    # 30 days (30 * 24 * 60)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 43200

    # Cost factor for login password hashes
    BCRYPT_ROUNDS: int = 12

    # --- Database ---
    # Local SQLite file by default, any SQLAlchemy URL works
    DATABASE_URL: str = "sqlite:///./keyfort.db"
    DATABASE_ECHO: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

# Cached so the .env file is read once per process
@lru_cache
def get_settings():
    return Settings()

settings = get_settings()
