"""Endurance Flask application entrypoint."""
from __future__ import annotations

from io import BytesIO
from typing import Any, Dict, Optional, Tuple

import logging
import math

from flask import Flask, jsonify, request, send_file
from flask_cors import CORS

from .config import get_settings
from .engine import (
    DeflectionOutcome,
    ImpactMetrics,
    build_impact_summary,
    build_scenario_briefing,
    compute_deflection,
    compute_impact_metrics,
    describe_location,
    find_closest_earthquake,
    find_closest_impact,
    get_reference_catalog,
    to_geo_point,
    to_space_point,
)

logger = logging.getLogger(__name__)

PPTX_MIMETYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

settings = get_settings()
app = Flask(__name__)
app.json.sort_keys = False
CORS(app)

catalog = get_reference_catalog()


class BadRequest(ValueError):
    """Raised for request payloads that cannot be interpreted."""


def _optional_float(payload: Dict[str, Any], key: str, default: Optional[float] = None) -> Optional[float]:
    value = payload.get(key)
    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise BadRequest(f"{key} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise BadRequest(f"{key} must be finite, got {value!r}")
    return number


def _read_payload() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise BadRequest("request body must be a JSON object")
    return payload


def _required_float(payload: Dict[str, Any], key: str) -> float:
    value = _optional_float(payload, key)
    if value is None:
        raise BadRequest(f"{key} is required")
    return value


def _prepare_inputs(payload: Dict[str, Any]) -> Dict[str, Any]:
    inputs: Dict[str, Any] = {
        "asteroid_name": payload.get("asteroid_name"),
        "diameter_m": _required_float(payload, "diameter_m"),
        "velocity_kms": _required_float(payload, "velocity_kms"),
        "density_kg_m3": _optional_float(payload, "density_kg_m3", settings.default_density_kg_m3),
        "city": None,
        "latitude_deg": _optional_float(payload, "latitude_deg", settings.default_latitude),
        "longitude_deg": _optional_float(payload, "longitude_deg", settings.default_longitude),
        "target_population": None,
    }

    city_name = payload.get("city")
    if city_name:
        try:
            city = catalog.get_city(str(city_name))
        except KeyError:
            raise BadRequest(f"Unknown city preset: {city_name}") from None
        inputs.update(
            city=city.name,
            latitude_deg=city.latitude_deg,
            longitude_deg=city.longitude_deg,
            target_population=city.population,
        )

    population = _optional_float(payload, "target_population")
    if population is not None:
        inputs["target_population"] = int(population)
    return inputs


def _deflection_kwargs(payload: Dict[str, Any]) -> Dict[str, float]:
    return {
        "lead_time_years": _optional_float(payload, "lead_time_years", settings.lead_time_years),
        "interceptor_mass_kg": _optional_float(payload, "interceptor_mass_kg", settings.interceptor_mass_kg),
        "interceptor_velocity_kms": _optional_float(
            payload, "interceptor_velocity_kms", settings.interceptor_velocity_kms
        ),
        "momentum_enhancement_factor": _optional_float(
            payload, "momentum_enhancement_factor", settings.momentum_enhancement_factor
        ),
    }


def _run_scenario(
    payload: Dict[str, Any]
) -> Tuple[Dict[str, Any], ImpactMetrics, Optional[DeflectionOutcome]]:
    inputs = _prepare_inputs(payload)

    metrics = compute_impact_metrics(
        inputs["diameter_m"],
        inputs["velocity_kms"],
        inputs["density_kg_m3"],
        target_population=inputs["target_population"],
    )

    deflection = None
    if payload.get("include_deflection") or "lead_time_years" in payload:
        deflection = compute_deflection(
            inputs["velocity_kms"],
            inputs["diameter_m"],
            inputs["density_kg_m3"],
            **_deflection_kwargs(payload),
        )
    return inputs, metrics, deflection


def _build_scenario(payload: Dict[str, Any]) -> Dict[str, Any]:
    inputs, metrics, deflection = _run_scenario(payload)
    impact_analog = find_closest_impact(metrics, catalog.impacts)
    earthquake_analog = find_closest_earthquake(metrics, catalog.earthquakes)

    return {
        "inputs": inputs,
        "location": describe_location(inputs["latitude_deg"], inputs["longitude_deg"]),
        "metrics": metrics.as_dict(),
        "deflection": deflection.as_dict() if deflection is not None else None,
        "analogs": {
            "impact": impact_analog.as_dict() if impact_analog is not None else None,
            "earthquake": earthquake_analog.as_dict() if earthquake_analog is not None else None,
        },
    }


@app.errorhandler(ValueError)
def handle_invalid_input(exc: ValueError) -> Any:
    # DomainError and BadRequest are both ValueErrors.
    logger.warning("Rejected request to %s: %s", request.path, exc)
    return jsonify({"error": str(exc)}), 400


@app.route("/api/health", methods=["GET"])
def health() -> Any:
    return jsonify({"status": "ok"})


@app.route("/api/cities", methods=["GET"])
def city_presets() -> Any:
    return jsonify({"cities": [city.as_dict() for city in catalog.cities]})


@app.route("/api/impact", methods=["POST"])
def impact() -> Any:
    payload = _read_payload()
    return jsonify(_build_scenario(payload))


@app.route("/api/deflection", methods=["POST"])
def deflection() -> Any:
    payload = _read_payload()
    outcome = compute_deflection(
        _required_float(payload, "velocity_kms"),
        _required_float(payload, "diameter_m"),
        _optional_float(payload, "density_kg_m3", settings.default_density_kg_m3),
        **_deflection_kwargs(payload),
    )
    return jsonify(outcome.as_dict())


@app.route("/api/coordinates", methods=["POST"])
def coordinates() -> Any:
    payload = _read_payload()
    radius = _optional_float(payload, "radius", settings.globe_radius)

    if all(key in payload for key in ("x", "y", "z")):
        point = to_geo_point(
            _required_float(payload, "x"),
            _required_float(payload, "y"),
            _required_float(payload, "z"),
            radius,
        )
        return jsonify({"geo_point": point.as_dict(), "location": describe_location(point.latitude_deg, point.longitude_deg)})

    space_point = to_space_point(
        _required_float(payload, "latitude_deg"),
        _required_float(payload, "longitude_deg"),
        radius,
    )
    return jsonify({"space_point": space_point.as_dict()})


@app.route("/api/summary", methods=["POST"])
def summary() -> Any:
    payload = _read_payload()
    _, metrics, deflection_outcome = _run_scenario(payload)
    return jsonify({"summary": build_impact_summary(metrics, deflection=deflection_outcome)})


@app.route("/api/briefing", methods=["POST"])
def briefing() -> Any:
    payload = _read_payload()
    scenario = _build_scenario(payload)
    deck = build_scenario_briefing(scenario, author=payload.get("author"))
    return send_file(
        BytesIO(deck),
        mimetype=PPTX_MIMETYPE,
        as_attachment=True,
        download_name="impact-briefing.pptx",
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if settings.debug else logging.INFO)
    app.run(debug=settings.debug)
