# apps/api/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apps.api.routers.documents import router as documents_router
from core.config import settings
from core.logging import configure_logging, logger

configure_logging()

app = FastAPI(title="Housing Documents API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(documents_router)

logger.info("documents API ready (header token %r)", settings.REQUEST_HEADER)


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}
