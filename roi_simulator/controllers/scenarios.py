from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, field_validator
from sqlalchemy.exc import SQLAlchemyError

from roi_simulator import db as db_module
from roi_simulator.config import Settings
from roi_simulator.controllers.simulate import ScenarioInputsPayload
from roi_simulator.errors import RoiSimulatorError, UnexpectedError
from roi_simulator.metrics import scenario_delete_total, scenario_save_total
from roi_simulator.services.scenarios import (
    create_scenario,
    delete_scenario,
    get_scenario,
    list_scenarios,
    scenario_to_dict,
)

settings = Settings()
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scenarios", tags=["scenarios"])


class ScenarioCreateRequest(ScenarioInputsPayload):
    scenario_name: str | None = None

    @field_validator("scenario_name", mode="before")
    @classmethod
    def coerce_name(cls, value: Any) -> Any:
        # falsy values count as missing, anything else is kept as text
        if value is None or isinstance(value, str):
            return value
        return str(value) if value else None


class ScenarioResponse(BaseModel):
    success: bool = True
    scenario: dict[str, Any]


class ScenarioListResponse(BaseModel):
    success: bool = True
    scenarios: list[dict[str, Any]]


class DeleteResponse(BaseModel):
    success: bool = True


@router.post("", response_model=ScenarioResponse)
async def save_scenario_endpoint(body: ScenarioCreateRequest):
    try:
        record = await asyncio.to_thread(_save_scenario, body)
    except RoiSimulatorError:
        scenario_save_total.labels(status="invalid").inc()
        raise
    except SQLAlchemyError as exc:
        scenario_save_total.labels(status="error").inc()
        logger.exception("failed to save scenario")
        raise UnexpectedError("Save failed") from exc
    scenario_save_total.labels(status="ok").inc()
    logger.info("scenario saved: %s", record["id"])
    return ScenarioResponse(scenario=record)


@router.get("", response_model=ScenarioListResponse)
async def list_scenarios_endpoint():
    records = await asyncio.to_thread(_list_scenarios, settings.scenario_list_limit)
    return ScenarioListResponse(scenarios=records)


@router.get("/{scenario_id}", response_model=ScenarioResponse)
async def get_scenario_endpoint(scenario_id: str):
    record = await asyncio.to_thread(_get_scenario, scenario_id)
    return ScenarioResponse(scenario=record)


@router.delete("/{scenario_id}", response_model=DeleteResponse)
async def delete_scenario_endpoint(scenario_id: str):
    try:
        await asyncio.to_thread(_delete_scenario, scenario_id)
    except RoiSimulatorError as exc:
        scenario_delete_total.labels(status=exc.code.lower()).inc()
        raise
    scenario_delete_total.labels(status="ok").inc()
    logger.info("scenario deleted: %s", scenario_id)
    return DeleteResponse()


def _save_scenario(body: ScenarioCreateRequest) -> dict[str, Any]:
    with db_module.SessionLocal() as session:
        record = create_scenario(
            session,
            scenario_name=body.scenario_name,
            inputs=body.to_inputs(),
        )
        return scenario_to_dict(record)


def _list_scenarios(limit: int) -> list[dict[str, Any]]:
    with db_module.SessionLocal() as session:
        return [scenario_to_dict(record) for record in list_scenarios(session, limit=limit)]


def _get_scenario(scenario_id: str) -> dict[str, Any]:
    with db_module.SessionLocal() as session:
        return scenario_to_dict(get_scenario(session, scenario_id))


def _delete_scenario(scenario_id: str) -> None:
    with db_module.SessionLocal() as session:
        delete_scenario(session, scenario_id)
