"""
Core configuration for ZipPrompt
"""
from pydantic_settings import BaseSettings
from typing import List
from functools import lru_cache


class Settings(BaseSettings):
    # ===========================================
    # APPLICATION
    # ===========================================

    APP_NAME: str = "ZipPrompt"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Turn a zipped codebase into a single LLM-ready document"

    # ===========================================
    # SERVER & INFRASTRUCTURE
    # ===========================================

    DEBUG: bool = False
    BACKEND_HOST: str = "127.0.0.1"  # Bind address (use 0.0.0.0 to expose externally)
    BACKEND_PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173", "http://127.0.0.1:3000"]

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/zipprompt.db"

    # ===========================================
    # ARCHIVE UPLOADS
    # ===========================================

    MAX_UPLOAD_SIZE_MB: int = 100
    ALLOWED_ARCHIVE_MIME_TYPES: List[str] = [
        "application/zip",
        "application/x-zip-compressed",
    ]

    # Archive safety limits (checked before any entry is read)
    MAX_FILES_IN_ARCHIVE: int = 10000
    MAX_TOTAL_UNCOMPRESSED_SIZE_MB: int = 500
    MAX_PATH_DEPTH: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def max_total_uncompressed_bytes(self) -> int:
        return self.MAX_TOTAL_UNCOMPRESSED_SIZE_MB * 1024 * 1024


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
