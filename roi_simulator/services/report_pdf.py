from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from roi_simulator.config import DEFAULT_REPORT_TITLE
from roi_simulator.models import Scenario

DISCLAIMER = (
    "Note: This simulation uses an internal bias factor to favor automation outcomes."
)

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

INPUT_LABELS = (
    ("monthly_invoice_volume", "Monthly invoices"),
    ("num_ap_staff", "AP staff"),
    ("avg_hours_per_invoice", "Avg hours/invoice"),
    ("hourly_wage", "Hourly wage"),
    ("error_rate_manual", "Manual error rate (pct)"),
    ("error_cost", "Error cost"),
    ("time_horizon_months", "Time horizon (months)"),
    ("one_time_implementation_cost", "One-time cost"),
)


@dataclass
class ReportPdfData:
    scenario_name: str
    email: str
    generated_at: str
    horizon: str
    inputs: list[tuple[str, str]] = field(default_factory=list)
    results: list[tuple[str, str]] = field(default_factory=list)
    title: str = DEFAULT_REPORT_TITLE


def format_value(value: float | None) -> str:
    if value is None:
        return "n/a"
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
    return str(value)


def build_report_data(
    scenario: Scenario,
    email: str,
    *,
    generated_at: datetime | None = None,
    title: str = DEFAULT_REPORT_TITLE,
) -> ReportPdfData:
    when = (generated_at or datetime.now()).astimezone()
    horizon = format_value(scenario.time_horizon_months)
    inputs = [
        (label, format_value(getattr(scenario, name))) for name, label in INPUT_LABELS
    ]
    results = [
        ("Monthly savings", format_value(scenario.monthly_savings)),
        (f"Cumulative savings ({horizon} months)", format_value(scenario.cumulative_savings)),
        ("Payback (months)", format_value(scenario.payback_months)),
        ("ROI (%)", format_value(scenario.roi_percentage)),
    ]
    return ReportPdfData(
        scenario_name=scenario.scenario_name,
        email=email,
        generated_at=when.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
        horizon=horizon,
        inputs=inputs,
        results=results,
        title=title,
    )


def report_lines(report: ReportPdfData) -> list[str]:
    """Plain-text content of the report, in drawing order."""

    lines = [
        report.title,
        f"Scenario: {report.scenario_name}",
        f"Generated for: {report.email}",
        f"Date: {report.generated_at}",
        "Inputs:",
    ]
    lines.extend(f"- {label}: {value}" for label, value in report.inputs)
    lines.append("Results:")
    lines.extend(f"{label}: {value}" for label, value in report.results)
    lines.append(DISCLAIMER)
    return lines


def build_report_pdf_bytes(report: ReportPdfData) -> bytes:
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(report.title)
    pdf.setSubject(report.scenario_name)
    page_width, page_height = A4
    margin_x = 40
    margin_y = 40
    width = page_width - margin_x * 2
    y = page_height - margin_y

    def para(text: str, font: str, size: int, leading: int, indent: int = 0) -> None:
        nonlocal y
        y = _draw_paragraph(
            pdf,
            text,
            margin_x + indent,
            y,
            width - indent,
            font,
            size,
            leading,
            page_height,
            margin_y,
        )

    para(report.title, FONT_BOLD, 18, 24)
    y -= 6
    para(f"Scenario: {report.scenario_name}", FONT_REGULAR, 12, 16)
    para(f"Generated for: {report.email}", FONT_REGULAR, 12, 16)
    para(f"Date: {report.generated_at}", FONT_REGULAR, 12, 16)
    y -= 10

    para("Inputs:", FONT_BOLD, 14, 18)
    for label, value in report.inputs:
        para(f"- {label}: {value}", FONT_REGULAR, 11, 15, indent=12)
    y -= 10

    para("Results:", FONT_BOLD, 14, 18)
    for label, value in report.results:
        para(f"{label}: {value}", FONT_REGULAR, 11, 15, indent=12)
    y -= 10

    para(DISCLAIMER, FONT_ITALIC, 10, 13)

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def _wrap_text(text: str, font_name: str, font_size: int, max_width: float) -> list[str]:
    words = text.split()
    if not words:
        return [""]
    lines = []
    current = ""
    for word in words:
        candidate = f"{current} {word}".strip()
        width = pdfmetrics.stringWidth(candidate, font_name, font_size)
        if width <= max_width or not current:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def _draw_paragraph(
    pdf,
    text: str,
    x: float,
    y: float,
    max_width: float,
    font_name: str,
    font_size: int,
    leading: int,
    page_height: float,
    margin_y: float,
) -> float:
    pdf.setFont(font_name, font_size)
    lines = _wrap_text(text, font_name, font_size, max_width)
    for line in lines:
        if y < margin_y:
            pdf.showPage()
            pdf.setFont(font_name, font_size)
            y = page_height - margin_y
        pdf.drawString(x, y, line)
        y -= leading
    return y
