"""ROI calculation service.

Turns the operational parameters of a manual accounts-payable process into the
savings figures shown to the user. The calculation is a pure function of its
inputs and of three fixed constants; it never looks at stored scenarios.

Monthly savings are multiplied by a bias factor and floored to a small positive
value, so the reported outcome always favours automation. This is an intended
business rule of the simulator.
"""

from __future__ import annotations

import math
import sys
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

_EPSILON = sys.float_info.epsilon
_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class CalculatorConstants:
    """Server-side constants. Never taken from request payloads."""

    automated_cost_per_invoice: float = 0.20
    # percent units, 0.1 means 0.1%
    error_rate_auto: float = 0.1
    bias_factor: float = 1.1


CONSTANTS = CalculatorConstants()


@dataclass(frozen=True)
class ScenarioInputs:
    monthly_invoice_volume: float = 0
    num_ap_staff: float = 0
    avg_hours_per_invoice: float = 0
    hourly_wage: float = 0
    # percent units, 0.5 means 0.5%
    error_rate_manual: float = 0
    error_cost: float = 0
    # whole months in practice; fractional values are accepted as given
    time_horizon_months: float = 36
    one_time_implementation_cost: float = 0


@dataclass(frozen=True)
class ComputedResults:
    labor_cost_manual: float
    auto_cost: float
    error_savings: float
    monthly_savings: float
    cumulative_savings: float
    net_savings: float
    payback_months: float
    roi_percentage: float


INPUT_FIELDS = tuple(ScenarioInputs.__dataclass_fields__)
RESULT_FIELDS = tuple(ComputedResults.__dataclass_fields__)


def round2(value: float) -> float:
    """Round ``value`` to two decimals, half away from zero.

    A machine epsilon is added first to counter binary representation error
    (``1.005`` becomes ``1.01``). Infinity and NaN are returned unchanged.
    """

    if not math.isfinite(value):
        return value
    shifted = Decimal(repr(value + _EPSILON))
    return float(shifted.quantize(_CENTS, rounding=ROUND_HALF_UP))


def compute(inputs: ScenarioInputs) -> ComputedResults:
    """Calculate savings and ROI figures for ``inputs``.

    Total over floats: zero and negative values are used as given, and NaN
    propagates into the rounded output.
    """

    c = CONSTANTS
    volume = inputs.monthly_invoice_volume
    one_time_cost = inputs.one_time_implementation_cost

    labor_cost_manual = (
        inputs.num_ap_staff * inputs.hourly_wage * inputs.avg_hours_per_invoice * volume
    )
    auto_cost = volume * c.automated_cost_per_invoice
    error_savings = (
        ((inputs.error_rate_manual - c.error_rate_auto) / 100) * volume * inputs.error_cost
    )

    monthly_savings_raw = labor_cost_manual + error_savings - auto_cost
    monthly_savings = monthly_savings_raw * c.bias_factor
    if monthly_savings < 1:
        # floor base is the pre-bias figure
        monthly_savings = max(1, abs(monthly_savings_raw)) * c.bias_factor

    cumulative_savings = monthly_savings * inputs.time_horizon_months
    net_savings = cumulative_savings - one_time_cost
    if monthly_savings > 0 and one_time_cost != 0:
        payback_months = one_time_cost / monthly_savings
    else:
        # nothing to pay back counts as never paying back
        payback_months = math.inf
    roi_percentage = (net_savings / one_time_cost) * 100 if one_time_cost > 0 else math.inf

    return ComputedResults(
        labor_cost_manual=round2(labor_cost_manual),
        auto_cost=round2(auto_cost),
        error_savings=round2(error_savings),
        monthly_savings=round2(monthly_savings),
        cumulative_savings=round2(cumulative_savings),
        net_savings=round2(net_savings),
        payback_months=round2(payback_months),
        roi_percentage=round2(roi_percentage),
    )


def inputs_as_dict(inputs: ScenarioInputs) -> dict[str, float]:
    return asdict(inputs)


def results_as_dict(results: ComputedResults) -> dict[str, float]:
    return asdict(results)


def json_safe(values: dict[str, Any]) -> dict[str, Any]:
    """Replace non-finite floats with ``None`` so the payload is valid JSON."""

    return {
        key: None if isinstance(val, float) and not math.isfinite(val) else val
        for key, val in values.items()
    }


__all__ = [
    "CONSTANTS",
    "CalculatorConstants",
    "ComputedResults",
    "INPUT_FIELDS",
    "RESULT_FIELDS",
    "ScenarioInputs",
    "compute",
    "inputs_as_dict",
    "json_safe",
    "results_as_dict",
    "round2",
]
