from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """إعدادات التطبيق العامة مع تحميل القيم من ملف .env عند توفره."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "PDF Joiner API"
    app_version: str = "0.1.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    allow_credentials: bool = False

    # اسم الحقل المتكرر في نموذج الرفع واسم الملف الناتج
    upload_field: str = "pdfs"
    output_filename: str = "merged.pdf"

    pdf_backend: str = Field(default="pypdf", description="pypdf أو pymupdf")
    max_files: int = Field(default=50, ge=1)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
