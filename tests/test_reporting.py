"""Tests for scenario summaries and briefing export."""
from datetime import datetime, timezone
from io import BytesIO

from pptx import Presentation

from endurance.engine.deflection import compute_deflection
from endurance.engine.physics_engine import compute_impact_metrics
from endurance.engine.reporting import _format_year, build_impact_summary, build_scenario_briefing


def _slide_text(slide):
    chunks = []
    for shape in slide.shapes:
        if shape.has_text_frame:
            chunks.append(shape.text_frame.text)
        if getattr(shape, "has_table", False) and shape.has_table:
            for row in shape.table.rows:
                chunks.extend(cell.text for cell in row.cells)
    return "\n".join(chunks)


class TestImpactSummary:

    def test_unknown_population(self):
        text = build_impact_summary(compute_impact_metrics(1000, 20))
        assert "~75085.87 megatons" in text
        assert "~2.7 km radius" in text
        assert "people affected: unknown" in text
        assert len(text.splitlines()) == 5

    def test_population_in_thousands(self):
        text = build_impact_summary(compute_impact_metrics(1000, 20, target_population=1_000_000))
        assert "people affected: ~114K" in text

    def test_zero_population_reported_as_unknown(self):
        text = build_impact_summary(compute_impact_metrics(1000, 20, target_population=0))
        assert "people affected: unknown" in text

    def test_deflection_line(self):
        metrics = compute_impact_metrics(50, 15)
        text = build_impact_summary(metrics, deflection=compute_deflection(15, 50))
        assert text.splitlines()[-1].startswith("• Kinetic impactor succeeded (80% confidence)")

        failed = build_impact_summary(metrics, deflection=compute_deflection(20, 1500))
        assert "failed (5% confidence)" in failed


class TestYearFormatting:

    def test_eras(self):
        assert _format_year(2013) == "2013"
        assert _format_year(-1500) == "1,500 BCE"
        assert _format_year(-50_000) == "about 50,000 years ago"
        assert _format_year(-66_000_000) == "66 million years ago"
        assert _format_year(None) == "unknown"


class TestScenarioBriefing:

    def _scenario(self):
        metrics = compute_impact_metrics(300, 18, target_population=5_000_000)
        return {
            "inputs": {"asteroid_name": "Bennu", "diameter_m": 300, "velocity_kms": 18},
            "location": "Asia (35.7°N, 139.7°E)",
            "metrics": metrics.as_dict(),
            "deflection": compute_deflection(18, 300).as_dict(),
            "analogs": {
                "impact": {"name": "Barringer (Meteor Crater)", "energy_megatons": 10.0, "year": -50_000, "description": "Arizona."},
                "earthquake": {"name": "Tōhoku, Japan", "magnitude": 9.0, "year": 2011, "description": "Megathrust."},
            },
        }

    def test_deck_structure(self):
        deck = build_scenario_briefing(
            self._scenario(),
            generated_at=datetime(2026, 1, 2, 3, 4, tzinfo=timezone.utc),
            author="Planetary Defense Office",
        )
        assert deck[:2] == b"PK"

        prs = Presentation(BytesIO(deck))
        slides = list(prs.slides)
        assert len(slides) == 4
        title_text = _slide_text(slides[0])
        assert "Impact Briefing: Bennu" in title_text
        assert "2026-01-02 03:04 UTC" in title_text
        assert "Planetary Defense Office" in title_text
        assert "Crater Diameter" in _slide_text(slides[1])
        assert "Confidence: 70%" in _slide_text(slides[2])
        history = _slide_text(slides[3])
        assert "Barringer (Meteor Crater) (about 50,000 years ago)" in history
        assert "Tōhoku, Japan (2011), M9.0" in history

    def test_missing_sections(self):
        deck = build_scenario_briefing({"inputs": {}, "metrics": {}})
        slides = list(Presentation(BytesIO(deck)).slides)
        assert "No deflection mission simulated." in _slide_text(slides[2])
        assert "No historical analog available." in _slide_text(slides[3])
