"""Assessment Template Builder - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from assessment_builder.core.config import get_settings
from assessment_builder.core.logging import configure_logging
from assessment_builder.db.base import Base
from assessment_builder.db.session import engine
from assessment_builder.routers import api
from assessment_builder.services.errors import EditorError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database ready")

    yield

    await engine.dispose()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Author reusable assessment templates",
    debug=settings.debug,
    lifespan=lifespan,
)

app.include_router(api.router)


@app.exception_handler(EditorError)
async def editor_error_handler(request: Request, exc: EditorError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/health")
async def health():
    return {"status": "ok"}
