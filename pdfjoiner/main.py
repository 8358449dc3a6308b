from __future__ import annotations

from pathlib import Path
from typing import Iterable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from pdfjoiner.api import routers
from pdfjoiner.core.config import get_settings
from pdfjoiner.core.logging import configure_logging

# === إعدادات وتسجيل ===
settings = get_settings()
logger = configure_logging()

STATIC_DIR = Path(__file__).resolve().parent / "static"

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
)


# === CORS ===
def _as_list(val: Iterable | str | None, fallback: list[str]) -> list[str]:
    if val is None:
        return fallback
    if isinstance(val, (list, tuple, set)):
        return [str(x).strip() for x in val if str(x).strip()] or fallback
    s = str(val).strip()
    if not s:
        return fallback
    return [x.strip() for x in s.split(",") if x.strip()]


allow_origins = _as_list(settings.allow_origins, fallback=["*"])
allow_credentials = settings.allow_credentials

# ملاحظة أمنية: لا يجوز الجمع بين allow_credentials=True و allow_origins=["*"].
if allow_credentials and ("*" in allow_origins):
    logger.warning("تم تعطيل allow_credentials لأن قائمة الأصول تحتوي على '*'.")
    allow_credentials = False

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],  # لقراءة اسم الملف من الهيدر
)

# === Routers ===
for router in routers:
    app.include_router(router)


# === Basic endpoints ===
@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    logger.debug("Index page requested")
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@app.get("/health")
async def health_check() -> dict:
    logger.debug("Health check invoked")
    return {"status": "ok", "message": "PDF Joiner API is running"}
