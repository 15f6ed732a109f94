from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Column, DateTime, Float, String

from roi_simulator.models.base import Base


def _new_id() -> str:
    return str(uuid4())


class Scenario(Base):
    """Saved ROI scenario: inputs, computed results and creation time."""

    __tablename__ = "scenarios"

    id = Column(String(36), primary_key=True, default=_new_id)
    scenario_name = Column(String(255), nullable=False)

    monthly_invoice_volume = Column(Float)
    num_ap_staff = Column(Float)
    avg_hours_per_invoice = Column(Float)
    hourly_wage = Column(Float)
    error_rate_manual = Column(Float)
    error_cost = Column(Float)
    time_horizon_months = Column(Float)
    one_time_implementation_cost = Column(Float)

    labor_cost_manual = Column(Float)
    auto_cost = Column(Float)
    error_savings = Column(Float)
    monthly_savings = Column(Float)
    cumulative_savings = Column(Float)
    net_savings = Column(Float)
    payback_months = Column(Float)
    roi_percentage = Column(Float)

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )
