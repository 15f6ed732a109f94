from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from pydantic import BaseModel

from roi_simulator.config import Settings
from roi_simulator.controllers import api
from roi_simulator.db import init_db
from roi_simulator.errors import RoiSimulatorError
from roi_simulator.logger import setup_logging

settings = Settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    success: bool = False
    code: str
    message: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    await asyncio.to_thread(init_db, settings)
    yield


app = FastAPI(
    title="Invoicing ROI Simulator API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(RoiSimulatorError)
async def handle_simulator_error(_request: Request, exc: RoiSimulatorError) -> JSONResponse:
    err = ErrorResponse(code=exc.code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=err.model_dump())


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "rejected request body on %s %s: %d errors",
        request.method,
        request.url.path,
        len(exc.errors()),
    )
    err = ErrorResponse(code="VALIDATION_ERROR", message="Invalid request body")
    return JSONResponse(status_code=400, content=err.model_dump())


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    err = ErrorResponse(code="SERVER_ERROR", message="Server error")
    return JSONResponse(status_code=500, content=err.model_dump())


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(api.router)

Instrumentator().instrument(app).expose(app)
