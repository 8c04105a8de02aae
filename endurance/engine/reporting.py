"""Scenario summaries and presentation export for impact briefings."""
from __future__ import annotations

from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Dict, List, Optional

from pptx import Presentation
from pptx.util import Inches, Pt

from .deflection import DeflectionOutcome
from .physics_engine import ImpactMetrics


def build_impact_summary(
    metrics: ImpactMetrics,
    *,
    deflection: Optional[DeflectionOutcome] = None,
) -> str:
    """Plain-text bullet summary of a scenario, usable without any text service."""

    # A zero estimate is reported as unknown too.
    if not metrics.approx_casualties:
        affected = "unknown"
    else:
        affected = f"~{metrics.approx_casualties // 1000}K"

    lines = [
        f"• Energy: ~{metrics.tnt_megatons} megatons TNT equivalent.",
        f"• Heavy destruction within ~{metrics.destruction_radius_km} km radius; severe structural collapse.",
        f"• Approx. people affected: {affected} (estimate).",
        "• Possible regional fires; atmospheric dust could reduce sunlight for several months.",
        "• Recommended: Mass evacuations from impact zone; prioritize emergency services and relief coordination.",
    ]
    if deflection is not None:
        if deflection.success:
            lines.append(
                f"• Kinetic impactor succeeded ({deflection.confidence_percent}% confidence): {deflection.reason}."
            )
        else:
            lines.append(
                f"• Kinetic impactor failed ({deflection.confidence_percent}% confidence): {deflection.reason}."
            )
    return "\n".join(lines)


def build_scenario_briefing(
    scenario: Dict[str, Any],
    *,
    generated_at: datetime | None = None,
    author: str | None = None,
) -> bytes:
    """Create a mission briefing deck for a scenario payload."""

    generated_at = generated_at or datetime.now(timezone.utc)

    prs = Presentation()
    _populate_title_slide(prs, scenario, generated_at, author)
    _populate_impact_slide(prs, scenario)
    _populate_defense_slide(prs, scenario)
    _populate_analog_slide(prs, scenario)

    stream = BytesIO()
    prs.save(stream)
    stream.seek(0)
    return stream.read()


# ---------------------------------------------------------------------------
# Slide builders
# ---------------------------------------------------------------------------

def _populate_title_slide(prs: Presentation, scenario: Dict[str, Any], generated_at: datetime, author: str | None) -> None:
    slide = prs.slides.add_slide(prs.slide_layouts[0])
    inputs = scenario.get("inputs", {})

    name = inputs.get("asteroid_name") or "Asteroid"
    slide.shapes.title.text = f"Impact Briefing: {name}"

    lines = [
        f"Generated {generated_at.strftime('%Y-%m-%d %H:%M UTC')}",
        f"Target: {scenario.get('location') or 'Unknown location'}",
    ]
    if author:
        lines.append(f"Prepared for {author}")
    slide.placeholders[1].text = "\n".join(lines)


def _populate_impact_slide(prs: Presentation, scenario: Dict[str, Any]) -> None:
    slide = prs.slides.add_slide(prs.slide_layouts[5])  # Title only
    slide.shapes.title.text = "Impact Metrics"

    inputs = scenario.get("inputs", {})
    metrics = scenario.get("metrics", {})
    rows = [
        ("Diameter", _format_number(inputs.get("diameter_m"), "m")),
        ("Velocity", _format_number(inputs.get("velocity_kms"), "km/s")),
        ("Kinetic Energy", _format_number(metrics.get("kinetic_energy_joules"), "J")),
        ("TNT Equivalent", _format_number(metrics.get("tnt_megatons"), "Mt")),
        ("Crater Diameter", _format_number(metrics.get("crater_diameter_km"), "km")),
        ("Destruction Radius", _format_number(metrics.get("destruction_radius_km"), "km")),
        ("Casualties (est.)", _format_number(metrics.get("approx_casualties"), precision=0, default="Unknown")),
        ("Seismic Magnitude", _format_number(metrics.get("seismic_equivalent_magnitude"), precision=1)),
    ]

    table = slide.shapes.add_table(len(rows) + 1, 2, Inches(0.5), Inches(1.5), Inches(9.0), Inches(4.5)).table
    table.columns[0].width = Inches(4.0)
    table.columns[1].width = Inches(5.0)

    table.cell(0, 0).text = "Metric"
    table.cell(0, 1).text = "Value"

    for idx, (label, value) in enumerate(rows, start=1):
        table.cell(idx, 0).text = label
        table.cell(idx, 1).text = value

    for row in table.rows:
        for cell in row.cells:
            for paragraph in cell.text_frame.paragraphs:
                for run in paragraph.runs:
                    run.font.size = Pt(16)


def _populate_defense_slide(prs: Presentation, scenario: Dict[str, Any]) -> None:
    slide = prs.slides.add_slide(prs.slide_layouts[1])
    slide.shapes.title.text = "Kinetic Impactor Defense"
    body = slide.shapes.placeholders[1].text_frame
    body.clear()

    deflection = scenario.get("deflection")
    if not deflection:
        bullets = ["No deflection mission simulated."]
    else:
        bullets = [
            f"Outcome: {'Success' if deflection.get('success') else 'Failure'}",
            f"Confidence: {deflection.get('confidence_percent', 0)}%",
            f"Assessment: {deflection.get('reason', '—')}",
            f"Velocity change: {_format_number(deflection.get('velocity_change_ms'), 'm/s', precision=4)}",
            f"Miss distance: {_format_number(deflection.get('miss_distance_km'), 'km')}",
            f"Safety margin: {_format_number(deflection.get('safety_margin_km'), 'km')}",
        ]
    _write_bullets(body, bullets)


def _populate_analog_slide(prs: Presentation, scenario: Dict[str, Any]) -> None:
    slide = prs.slides.add_slide(prs.slide_layouts[1])
    slide.shapes.title.text = "Historical Context"
    body = slide.shapes.placeholders[1].text_frame
    body.clear()

    analogs = scenario.get("analogs", {})
    bullets: List[str] = []

    impact = analogs.get("impact")
    if impact:
        bullets.append(
            f"Closest impact: {impact['name']} ({_format_year(impact.get('year'))}), "
            f"{_format_number(impact.get('energy_megatons'), 'Mt')}"
        )
        bullets.append(impact.get("description", ""))
    earthquake = analogs.get("earthquake")
    if earthquake:
        bullets.append(
            f"Comparable earthquake: {earthquake['name']} ({_format_year(earthquake.get('year'))}), "
            f"M{earthquake.get('magnitude')}"
        )
        bullets.append(earthquake.get("description", ""))
    if not bullets:
        bullets.append("No historical analog available.")
    _write_bullets(body, bullets)


def _write_bullets(body: Any, bullets: List[str]) -> None:
    for text in bullets:
        if not text:
            continue
        p = body.add_paragraph()
        p.text = text
        p.level = 0


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def _format_number(value: Any, units: str | None = None, precision: int = 2, default: str = "—") -> str:
    try:
        if value is None:
            raise ValueError
        number = float(value)
        if abs(number) >= 1e12:
            formatted = f"{number:.{precision}e}"
        elif abs(number) >= 1_000_000_000:
            formatted = f"{number/1_000_000_000:.2f}B"
        elif abs(number) >= 1_000_000:
            formatted = f"{number/1_000_000:.2f}M"
        elif abs(number) >= 1_000:
            formatted = f"{number/1_000:.2f}k"
        else:
            formatted = f"{number:.{precision}f}"
        return f"{formatted}{(' ' + units) if units else ''}"
    except (TypeError, ValueError):
        return default


def _format_year(year: Any) -> str:
    if year is None:
        return "unknown"
    year = int(year)
    if year >= 0:
        return str(year)
    if year <= -1_000_000:
        return f"{-year / 1_000_000:g} million years ago"
    if year <= -10_000:
        return f"about {-year:,} years ago"
    return f"{-year:,} BCE"
