from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from fastapi import APIRouter, Response
from pydantic import BaseModel, ConfigDict, Field, field_validator

from roi_simulator import db as db_module
from roi_simulator.config import Settings
from roi_simulator.errors import (
    MalformedIdentifierError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from roi_simulator.metrics import report_generate_total, report_render_seconds
from roi_simulator.services.report_pdf import build_report_data, build_report_pdf_bytes
from roi_simulator.services.scenarios import get_scenario

settings = Settings()
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/report", tags=["report"])


class ReportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    scenario_id: str | None = Field(None, alias="scenarioId")
    email: str | None = None

    @field_validator("scenario_id", "email", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value) if value else None


@router.post("/generate")
async def generate_report_endpoint(body: ReportRequest) -> Response:
    email = (body.email or "").strip()
    if not email:
        report_generate_total.labels(status="invalid").inc()
        raise ValidationError("Email required")
    if not body.scenario_id:
        report_generate_total.labels(status="invalid").inc()
        raise ValidationError("scenarioId required")

    try:
        filename, pdf_bytes = await asyncio.to_thread(_render_report, body.scenario_id, email)
    except MalformedIdentifierError:
        report_generate_total.labels(status="invalid").inc()
        raise
    except NotFoundError as exc:
        report_generate_total.labels(status="not_found").inc()
        raise NotFoundError("Scenario not found") from exc
    except Exception as exc:
        report_generate_total.labels(status="error").inc()
        logger.exception("report generation failed for scenario %s", body.scenario_id)
        raise UnexpectedError("Report generation failed") from exc

    report_generate_total.labels(status="ok").inc()
    logger.info("report generated for scenario %s", body.scenario_id)
    headers = {"Content-Disposition": f'attachment; filename="{filename}.pdf"'}
    return Response(content=pdf_bytes, media_type="application/pdf", headers=headers)


def _render_report(scenario_id: str, email: str) -> tuple[str, bytes]:
    with db_module.SessionLocal() as session:
        scenario = get_scenario(session, scenario_id)
        data = build_report_data(scenario, email, title=settings.report_title)
    start = time.perf_counter()
    pdf_bytes = build_report_pdf_bytes(data)
    report_render_seconds.observe(time.perf_counter() - start)
    return _safe_filename(scenario.scenario_name), pdf_bytes


def _safe_filename(name: str | None) -> str:
    cleaned = "".join(
        ch for ch in (name or "") if ch.isascii() and (ch.isalnum() or ch in " ._-")
    )
    cleaned = cleaned.strip()
    return cleaned or "report"
