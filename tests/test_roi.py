import dataclasses
import math

import pytest

from roi_simulator.services.roi import (
    CONSTANTS,
    ScenarioInputs,
    compute,
    json_safe,
    results_as_dict,
    round2,
)

BASELINE = ScenarioInputs(
    monthly_invoice_volume=2000,
    num_ap_staff=3,
    avg_hours_per_invoice=0.17,
    hourly_wage=30,
    error_rate_manual=0.5,
    error_cost=100,
    time_horizon_months=36,
    one_time_implementation_cost=50000,
)


def test_compute_baseline_scenario():
    results = compute(BASELINE)
    assert results.labor_cost_manual == 30600
    assert results.auto_cost == 400
    assert results.error_savings == 800
    assert results.monthly_savings == 34100
    assert results.cumulative_savings == 1227600
    assert results.net_savings == 1177600
    assert results.payback_months == 1.47
    assert results.roi_percentage == 2355.2


def test_compute_all_zero_inputs_hits_floor():
    results = compute(ScenarioInputs())
    assert results.labor_cost_manual == 0
    assert results.auto_cost == 0
    assert results.monthly_savings == 1.1
    assert results.cumulative_savings == 39.6
    assert results.net_savings == 39.6
    assert results.payback_months == math.inf
    assert results.roi_percentage == math.inf


def test_zero_implementation_cost_gives_infinite_roi():
    results = compute(dataclasses.replace(BASELINE, one_time_implementation_cost=0))
    assert results.roi_percentage == math.inf
    assert results.payback_months == math.inf
    assert results.net_savings == results.cumulative_savings


def test_floor_uses_pre_bias_absolute_value():
    # raw monthly savings: 0 + 0 - 1000 * 0.20 = -200
    inputs = ScenarioInputs(monthly_invoice_volume=1000, error_rate_manual=0.1)
    results = compute(inputs)
    assert results.auto_cost == 200
    assert results.monthly_savings == 220
    assert results.cumulative_savings == 7920


def test_floor_for_small_positive_savings():
    # raw 0.5 -> biased 0.55 -> floored to max(1, 0.5) * 1.1
    inputs = ScenarioInputs(
        monthly_invoice_volume=1,
        num_ap_staff=1,
        avg_hours_per_invoice=1,
        hourly_wage=0.7,
        error_rate_manual=0.1,
    )
    assert compute(inputs).monthly_savings == 1.1


@pytest.mark.parametrize(
    "inputs",
    [
        ScenarioInputs(),
        BASELINE,
        ScenarioInputs(monthly_invoice_volume=-50, hourly_wage=-3, num_ap_staff=2),
        ScenarioInputs(monthly_invoice_volume=10_000, error_rate_manual=0),
    ],
)
def test_monthly_savings_never_below_floor(inputs):
    assert compute(inputs).monthly_savings >= 1.1


def test_cumulative_and_net_follow_monthly():
    inputs = dataclasses.replace(BASELINE, time_horizon_months=12)
    results = compute(inputs)
    assert results.cumulative_savings == round2(34100 * 12)
    assert results.net_savings == round2(results.cumulative_savings - 50000)


def test_compute_is_deterministic():
    assert compute(BASELINE) == compute(BASELINE)
    assert results_as_dict(compute(BASELINE)) == results_as_dict(compute(BASELINE))


def test_negative_implementation_cost_is_not_rejected():
    results = compute(dataclasses.replace(BASELINE, one_time_implementation_cost=-341000))
    assert results.roi_percentage == math.inf
    assert results.payback_months == -10
    assert results.net_savings == 1568600


def test_nan_input_propagates():
    results = compute(dataclasses.replace(BASELINE, monthly_invoice_volume=math.nan))
    assert math.isnan(results.labor_cost_manual)
    assert math.isnan(results.monthly_savings)
    assert math.isnan(results.roi_percentage)
    # NaN > 0 is false, so the payback guard yields infinity
    assert results.payback_months == math.inf


def test_round2_half_away_from_zero():
    assert round2(1.005) == 1.01
    assert round2(2.675) == 2.68
    assert round2(-1.256) == -1.26
    assert round2(10) == 10.0


def test_round2_passes_non_finite_values_through():
    assert round2(math.inf) == math.inf
    assert round2(-math.inf) == -math.inf
    assert math.isnan(round2(math.nan))


def test_constants_are_sealed():
    assert CONSTANTS.automated_cost_per_invoice == 0.20
    assert CONSTANTS.error_rate_auto == 0.1
    assert CONSTANTS.bias_factor == 1.1
    with pytest.raises(dataclasses.FrozenInstanceError):
        CONSTANTS.bias_factor = 2.0


def test_inputs_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        BASELINE.hourly_wage = 99


def test_json_safe_replaces_non_finite():
    data = json_safe({"a": math.inf, "b": math.nan, "c": 1.5, "d": "x"})
    assert data == {"a": None, "b": None, "c": 1.5, "d": "x"}
