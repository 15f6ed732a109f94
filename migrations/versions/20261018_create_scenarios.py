"""create scenarios table

Revision ID: 20261018_create_scenarios
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261018_create_scenarios"
down_revision = None
branch_labels = None
depends_on = None

INPUT_COLUMNS = (
    "monthly_invoice_volume",
    "num_ap_staff",
    "avg_hours_per_invoice",
    "hourly_wage",
    "error_rate_manual",
    "error_cost",
    "time_horizon_months",
    "one_time_implementation_cost",
)

RESULT_COLUMNS = (
    "labor_cost_manual",
    "auto_cost",
    "error_savings",
    "monthly_savings",
    "cumulative_savings",
    "net_savings",
    "payback_months",
    "roi_percentage",
)


def upgrade() -> None:
    op.create_table(
        "scenarios",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("scenario_name", sa.String(length=255), nullable=False),
        *[sa.Column(name, sa.Float(), nullable=True) for name in INPUT_COLUMNS],
        *[sa.Column(name, sa.Float(), nullable=True) for name in RESULT_COLUMNS],
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_index("ix_scenarios_created_at", "scenarios", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_scenarios_created_at", table_name="scenarios")
    op.drop_table("scenarios")
