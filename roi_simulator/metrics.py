from prometheus_client import Counter, Histogram
# Prometheus metrics definitions

# Calculator latency is sub-millisecond; buckets cover slow hosts too
_calc_buckets = (
    0.0001,
    0.0005,
    0.001,
    0.005,
    0.01,
)

roi_calc_seconds = Histogram(
    "roi_calc_seconds", "ROI calculation latency", buckets=_calc_buckets
)

simulate_requests_total = Counter(
    "simulate_requests_total", "Total simulate requests"
)

# status: ok | invalid | error
scenario_save_total = Counter(
    "scenario_save_total", "Scenario save requests", ["status"]
)

# status: ok | not_found | invalid_id
scenario_delete_total = Counter(
    "scenario_delete_total", "Scenario delete requests", ["status"]
)

# status: ok | invalid | not_found | error
report_generate_total = Counter(
    "report_generate_total", "PDF report requests", ["status"]
)

_render_buckets = (
    0.01,
    0.05,
    0.1,
    0.5,
    1.0,
)

report_render_seconds = Histogram(
    "report_render_seconds", "PDF report rendering latency", buckets=_render_buckets
)

__all__ = [
    "roi_calc_seconds",
    "simulate_requests_total",
    "scenario_save_total",
    "scenario_delete_total",
    "report_generate_total",
    "report_render_seconds",
]
