"""Tests for the JSON API."""
import pytest

from endurance.app import PPTX_MIMETYPE


class TestReadEndpoints:

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.get_json() == {"status": "ok"}

    def test_cities(self, client):
        cities = client.get("/api/cities").get_json()["cities"]
        assert [city["name"] for city in cities] == ["New York", "London", "Tokyo", "Mumbai", "Sydney"]


class TestImpactEndpoint:

    def test_city_preset_scenario(self, client):
        response = client.post("/api/impact", json={"diameter_m": 1000, "velocity_kms": 20, "city": "tokyo"})
        assert response.status_code == 200
        body = response.get_json()

        assert body["inputs"]["city"] == "Tokyo"
        assert body["location"].startswith("Asia")
        assert body["metrics"]["tnt_megatons"] == pytest.approx(75085.87)
        assert isinstance(body["metrics"]["approx_casualties"], int)
        assert body["deflection"] is None
        assert body["analogs"]["impact"]["name"]
        assert body["analogs"]["earthquake"]["name"] == "Valdivia, Chile"

    def test_coordinates_without_population(self, client):
        body = client.post(
            "/api/impact",
            json={"diameter_m": 120, "velocity_kms": 17, "latitude_deg": 51.5, "longitude_deg": -0.1},
        ).get_json()
        assert body["metrics"]["approx_casualties"] is None
        assert body["location"] == "Europe (51.5°N, 0.1°W)"

    def test_lead_time_adds_deflection(self, client):
        body = client.post(
            "/api/impact", json={"diameter_m": 50, "velocity_kms": 15, "lead_time_years": 20}
        ).get_json()
        assert body["deflection"]["success"] is True
        assert body["deflection"]["confidence_percent"] == 95

    @pytest.mark.parametrize(
        "payload",
        [
            {"velocity_kms": 20},
            {"diameter_m": "big", "velocity_kms": 20},
            {"diameter_m": -10, "velocity_kms": 20},
            {"diameter_m": 100, "velocity_kms": 20, "city": "Atlantis"},
            {"diameter_m": 100, "velocity_kms": 20, "target_population": "inf"},
            {"diameter_m": "nan", "velocity_kms": 20},
        ],
    )
    def test_invalid_input(self, client, payload):
        response = client.post("/api/impact", json=payload)
        assert response.status_code == 400
        assert "error" in response.get_json()


class TestRequestBody:

    @pytest.mark.parametrize("path", ["/api/impact", "/api/deflection", "/api/coordinates", "/api/summary", "/api/briefing"])
    def test_non_object_body_rejected(self, client, path):
        response = client.post(path, json=[1, 2])
        assert response.status_code == 400
        assert response.get_json() == {"error": "request body must be a JSON object"}


class TestDeflectionEndpoint:

    def test_too_large(self, client):
        body = client.post("/api/deflection", json={"diameter_m": 1001, "velocity_kms": 20}).get_json()
        assert body["success"] is False
        assert body["confidence_percent"] == 5

    def test_custom_interceptor(self, client):
        body = client.post(
            "/api/deflection",
            json={"diameter_m": 200, "velocity_kms": 18, "lead_time_years": 1, "interceptor_mass_kg": 1e6},
        ).get_json()
        assert body["confidence_percent"] == 85

    def test_negative_lead_time(self, client):
        response = client.post("/api/deflection", json={"diameter_m": 50, "velocity_kms": 15, "lead_time_years": -2})
        assert response.status_code == 400


class TestCoordinatesEndpoint:

    def test_geo_to_space(self, client):
        body = client.post("/api/coordinates", json={"latitude_deg": 0, "longitude_deg": 0, "radius": 2}).get_json()
        assert body["space_point"]["x"] == pytest.approx(2.0)

    def test_space_to_geo(self, client):
        body = client.post("/api/coordinates", json={"x": 0, "y": 1, "z": 0}).get_json()
        assert body["geo_point"] == {"latitude_deg": pytest.approx(90.0), "longitude_deg": 0.0}
        assert body["location"].startswith("Arctic")

    def test_nan_latitude_rejected(self, client):
        response = client.post("/api/coordinates", json={"latitude_deg": "nan", "longitude_deg": 0})
        assert response.status_code == 400
        assert "finite" in response.get_json()["error"]

    def test_zero_radius(self, client):
        response = client.post("/api/coordinates", json={"latitude_deg": 0, "longitude_deg": 0, "radius": 0})
        assert response.status_code == 400


class TestReportEndpoints:

    def test_summary(self, client):
        body = client.post(
            "/api/summary", json={"diameter_m": 1000, "velocity_kms": 20, "include_deflection": True}
        ).get_json()
        assert "75085.87 megatons" in body["summary"]
        assert "Kinetic impactor failed" in body["summary"]

    def test_briefing_download(self, client):
        response = client.post("/api/briefing", json={"diameter_m": 300, "velocity_kms": 18, "city": "Mumbai"})
        assert response.status_code == 200
        assert response.mimetype == PPTX_MIMETYPE
        assert response.data[:2] == b"PK"
