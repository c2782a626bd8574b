from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8")
    APP_NAME: str = "File Header Validator"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    MAX_UPLOAD_SIZE_MB: float = 10.0
    # CORS: comma-separated list of allowed origins (e.g. "http://localhost:3000,https://app.example.com"). Empty = same-origin only.
    CORS_ORIGINS: str = ""
    HOST: str = "0.0.0.0"
    PORT: int = 8000


settings = Settings()
