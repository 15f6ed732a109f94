"""Persistence of named ROI scenarios."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from roi_simulator.errors import MalformedIdentifierError, NotFoundError, ValidationError
from roi_simulator.models import Scenario
from roi_simulator.services.roi import (
    INPUT_FIELDS,
    RESULT_FIELDS,
    ScenarioInputs,
    compute,
    inputs_as_dict,
    json_safe,
    results_as_dict,
)

DEFAULT_LIST_LIMIT = 50


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_scenario_id(raw: str | None) -> str:
    """Normalize ``raw`` into the canonical UUID string used as primary key."""

    if not raw:
        raise MalformedIdentifierError()
    try:
        return str(UUID(str(raw).strip()))
    except (TypeError, ValueError) as exc:
        raise MalformedIdentifierError() from exc


def create_scenario(
    db: Session,
    *,
    scenario_name: str | None,
    inputs: ScenarioInputs,
    created_at: datetime | None = None,
) -> Scenario:
    """Compute results for ``inputs`` and store them under ``scenario_name``."""

    name = (scenario_name or "").strip()
    if not name:
        raise ValidationError("Scenario name required")
    results = compute(inputs)
    record = Scenario(
        scenario_name=name,
        created_at=created_at or _now(),
        **_storable(inputs_as_dict(inputs)),
        **_storable(results_as_dict(results)),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def list_scenarios(db: Session, *, limit: int = DEFAULT_LIST_LIMIT) -> list[Scenario]:
    stmt = select(Scenario).order_by(Scenario.created_at.desc()).limit(limit)
    return list(db.scalars(stmt).all())


def get_scenario(db: Session, scenario_id: str | None) -> Scenario:
    key = parse_scenario_id(scenario_id)
    record = db.get(Scenario, key)
    if record is None:
        raise NotFoundError()
    return record


def delete_scenario(db: Session, scenario_id: str | None) -> None:
    key = parse_scenario_id(scenario_id)
    result = db.execute(delete(Scenario).where(Scenario.id == key))
    if result.rowcount == 0:
        db.rollback()
        raise NotFoundError()
    db.commit()


def scenario_to_dict(record: Scenario) -> dict[str, Any]:
    """JSON-ready view of a stored scenario."""

    data: dict[str, Any] = {
        "id": record.id,
        "scenario_name": record.scenario_name,
    }
    data.update(json_safe({field: getattr(record, field) for field in INPUT_FIELDS}))
    data["results"] = json_safe({field: getattr(record, field) for field in RESULT_FIELDS})
    data["created_at"] = _ensure_aware(record.created_at).isoformat()
    return data


def _storable(values: dict[str, float]) -> dict[str, float | None]:
    # NaN has no SQL representation; infinity round-trips as a float
    return {
        key: None if isinstance(val, float) and math.isnan(val) else val
        for key, val in values.items()
    }


__all__ = [
    "DEFAULT_LIST_LIMIT",
    "create_scenario",
    "delete_scenario",
    "get_scenario",
    "list_scenarios",
    "parse_scenario_id",
    "scenario_to_dict",
]
