from __future__ import annotations

import math
import time
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from roi_simulator.metrics import roi_calc_seconds, simulate_requests_total
from roi_simulator.services.roi import (
    INPUT_FIELDS,
    ComputedResults,
    ScenarioInputs,
    compute,
    inputs_as_dict,
    json_safe,
    results_as_dict,
)

router = APIRouter(tags=["simulate"])


class ScenarioInputsPayload(BaseModel):
    """Request body carrying calculator inputs.

    Missing or ``null`` fields fall back to their defaults, numeric strings are
    coerced, and anything unparseable becomes NaN instead of a 422.
    """

    model_config = ConfigDict(extra="ignore")

    monthly_invoice_volume: float = 0
    num_ap_staff: float = 0
    avg_hours_per_invoice: float = 0
    hourly_wage: float = 0
    error_rate_manual: float = 0
    error_cost: float = 0
    # months; fractional values pass through unchanged
    time_horizon_months: float = 36
    one_time_implementation_cost: float = 0

    @field_validator(*INPUT_FIELDS, mode="before")
    @classmethod
    def coerce_number(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return cls.model_fields[info.field_name].default
        if isinstance(value, bool):
            return float(value)
        if isinstance(value, float):
            return value
        if isinstance(value, int):
            try:
                return float(value)
            except OverflowError:
                return math.inf if value > 0 else -math.inf
        try:
            return float(str(value).strip())
        except ValueError:
            return math.nan

    def to_inputs(self) -> ScenarioInputs:
        return ScenarioInputs(**self.model_dump(include=set(INPUT_FIELDS)))


class SimulateResponse(BaseModel):
    success: bool = True
    inputs: dict[str, float | None]
    results: dict[str, float | None]


def timed_compute(inputs: ScenarioInputs) -> ComputedResults:
    start = time.perf_counter()
    results = compute(inputs)
    roi_calc_seconds.observe(time.perf_counter() - start)
    return results


@router.post("/simulate", response_model=SimulateResponse)
async def simulate(body: ScenarioInputsPayload | None = None) -> SimulateResponse:
    simulate_requests_total.inc()
    inputs = (body or ScenarioInputsPayload()).to_inputs()
    results = timed_compute(inputs)
    return SimulateResponse(
        inputs=json_safe(inputs_as_dict(inputs)),
        results=json_safe(results_as_dict(results)),
    )
