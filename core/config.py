from __future__ import annotations

import os

from pydantic import BaseModel


class Settings(BaseModel):
    # Header token an administrator puts on the first line of a document request.
    REQUEST_HEADER: str = os.getenv("REQUEST_HEADER", "المطلوب")
    BULLET_MARKERS: tuple[str, ...] = ("•", "-")
    MIN_MESSAGE_LENGTH: int = int(os.getenv("MIN_MESSAGE_LENGTH", "10"))
    GENERIC_ACKNOWLEDGEMENTS: set[str] = {"good", "ok", "تم", "done"}
    APPROVED_STATUS: str = os.getenv("APPROVED_STATUS", "approved")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # engine traces (slot extraction, alert counts, timings) are debug-level
    DOCUMENTS_LOG_LEVEL: str = os.getenv("DOCUMENTS_LOG_LEVEL", os.getenv("LOG_LEVEL", "INFO"))
    CORS_ALLOW_ORIGINS: list[str] = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost:3000").split(
        ","
    )


settings = Settings()
