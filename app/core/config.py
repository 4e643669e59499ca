from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    PATIENTS_FILE: Path = BASE_DIR / "data" / "patients.json"
    CORS_ORIGINS: str = "*"
    LOG_LEVEL: str = "INFO"
    # Include exception text in the "error" field of 500 responses
    EXPOSE_ERROR_DETAILS: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
