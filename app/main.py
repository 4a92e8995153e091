## Main application entry point
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.db.session import init_db
from app.generation.routes import router as generation_router
from app.logging_config import setup_logging
from app.planning.errors import PlanningError
from app.roadmaps.routes import router as roadmaps_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    yield


app = FastAPI(title="Study Plan Generator", lifespan=lifespan)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "Invalid request: " + "; ".join(parts)


@app.exception_handler(PlanningError)
async def planning_error_handler(request: Request, exc: PlanningError):
    logger.exception("Request %s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": str(exc) or "Failed"}, status_code=500)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({"error": str(exc) or "Failed"}, status_code=500)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # plan generation reports every failure the same way
    status_code = 500 if request.url.path.startswith("/api/plan") else 422
    return JSONResponse({"error": _format_validation_errors(exc)}, status_code=status_code)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


app.include_router(generation_router)
app.include_router(roadmaps_router)
