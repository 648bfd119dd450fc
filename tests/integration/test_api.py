"""Integration tests for the REST API."""

import copy

import pytest
from fastapi.testclient import TestClient

from lasersafety.web.app import create_app

pytestmark = pytest.mark.integration


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(create_app())


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestLimitsEndpoints:
    """Tests for /api/v1/limits."""

    def test_mpe(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/limits/exposure", json={"wavelength_nm": 532, "exposure_time_s": 0.25}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "defined"
        assert data["kind"] == "MPE"
        assert data["quantity"]["value"] == pytest.approx(6.364, rel=1e-3)
        assert data["trace"] is None

    def test_ael_with_trace(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/limits/exposure",
            json={
                "wavelength_nm": 632.8,
                "exposure_time_s": 0.25,
                "emission_class": "2",
                "include_trace": True,
            },
        )

        data = response.json()
        assert data["kind"] == "AEL"
        assert data["quantity"] == {"value": pytest.approx(1e-3), "unit": "W"}
        assert data["trace"]

    def test_outside_tables_is_not_an_error(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/limits/exposure", json={"wavelength_nm": 100, "exposure_time_s": 1}
        )

        assert response.status_code == 200
        assert response.json()["status"] == "not_applicable"
        assert response.json()["quantity"]["unit"] == "N/A"

    def test_rejects_non_positive_wavelength(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/limits/exposure", json={"wavelength_nm": 0, "exposure_time_s": 1}
        )
        assert response.status_code == 422

    def test_pulse_train(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/limits/pulse-train",
            json={
                "wavelength_nm": 1064,
                "pulse_width_s": 1e-8,
                "repetition_rate_hz": 1000,
                "exposure_time_s": 0.25,
            },
        )

        data = response.json()
        assert data["c5"] == 1.0
        assert data["number_of_pulses"] == 250
        assert data["grouping"] == "short_exposure"

    def test_critical(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/limits/critical",
            json={
                "wavelength_nm": 532,
                "exposure_time_s": 10,
                "pulse_width_s": 1e-8,
                "repetition_rate_hz": 1000,
            },
        )

        data = response.json()
        assert data["limiting_rule"] == "thermal_train"
        assert data["pulse_train"]["c5"] == pytest.approx(0.5)
        assert data["validation"]["is_valid"] is True


class TestHazardEndpoints:
    """Tests for /api/v1/hazard."""

    def test_nohd(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/nohd",
            json={
                "power_w": 0.005,
                "beam_diameter_mm": 2,
                "divergence_mrad": 1,
                "wavelength_nm": 532,
            },
        )

        data = response.json()
        assert data["governing"] == "eye"
        assert data["distance_m"] == pytest.approx(13.814, rel=1e-3)
        assert data["eye"]["hazard_level"] == "high"

    def test_nohd_collimated(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/nohd",
            json={
                "power_w": 1,
                "beam_diameter_mm": 2,
                "divergence_mrad": 0,
                "wavelength_nm": 532,
            },
        )

        data = response.json()
        assert data["distance_m"] is None
        assert data["is_infinite"] is True

    def test_classify_cw(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/classify", json={"wavelength_nm": 632.8, "power_w": 1e-3}
        )

        data = response.json()
        assert data["laser_class"] == "2"
        assert data["time_base_s"] == 0.25

    def test_classify_pulsed(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/classify",
            json={
                "wavelength_nm": 1064,
                "pulse_energy_j": 1e-6,
                "pulse": {"pulse_width_s": 1e-8, "repetition_rate_hz": 10},
            },
        )

        assert response.json()["laser_class"] == "3R"

    def test_classify_needs_one_emission(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/classify",
            json={"wavelength_nm": 532, "power_w": 1e-3, "pulse_energy_j": 1e-6},
        )
        assert response.status_code == 422

    def test_classify_energy_needs_timing(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/classify", json={"wavelength_nm": 532, "pulse_energy_j": 1e-6}
        )
        assert response.status_code == 422

    def test_classify_multiwavelength_additive(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/classify/multi",
            json={
                "lines": [
                    {"wavelength_nm": 532, "power_w": 3e-4},
                    {"wavelength_nm": 632.8, "power_w": 3e-4},
                ],
                "include_trace": True,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["laser_class"] == "2"
        assert data["method"] == "additive"
        assert data["additive_group"] == "Visible Thermal"
        assert data["sum_of_ratios"] == pytest.approx(0.6)
        assert data["lines"] == []
        assert data["trace"]

    def test_classify_multiwavelength_independent(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/classify/multi",
            json={
                "lines": [
                    {"wavelength_nm": 355, "power_w": 1e-3},
                    {
                        "wavelength_nm": 1550,
                        "pulse_energy_j": 1e-6,
                        "pulse": {"pulse_width_s": 1e-8, "repetition_rate_hz": 10},
                    },
                ]
            },
        )

        data = response.json()
        assert data["method"] == "independent"
        assert data["laser_class"] == "3B"
        assert [line["laser_class"] for line in data["lines"]][0] == "3B"

    def test_classify_multiwavelength_needs_lines(self, client: TestClient) -> None:
        response = client.post("/api/v1/hazard/classify/multi", json={"lines": []})
        assert response.status_code == 422

    def test_eyewear(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/eyewear",
            json={"wavelength_nm": 532, "power_w": 1, "beam_diameter_mm": 2},
        )

        data = response.json()
        assert data["marking"] == "532 D LB5"
        assert data["eyewear_needed"] is True

    def test_eyewear_pulsed(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/hazard/eyewear",
            json={
                "wavelength_nm": 532,
                "pulse_energy_j": 1e-6,
                "pulse": {"pulse_width_s": 1e-8, "repetition_rate_hz": 1000},
                "beam_diameter_mm": 2,
                "exposure_time_s": 10,
            },
        )

        assert response.json()["marking"] == "532 R LB3"


class TestScenarioEndpoints:
    """Tests for /api/v1/scenario."""

    def test_evaluate(self, client: TestClient, helium_neon_config) -> None:
        response = client.post("/api/v1/scenario", json={"config": helium_neon_config})

        assert response.status_code == 200
        data = response.json()
        assert data["scenario"]["name"] == "HeNe alignment laser"
        assert data["classification"]["laser_class"] == "2"
        assert data["critical_limit"] is None
        assert data["errors"] == []

    def test_evaluate_schema_error(self, client: TestClient, helium_neon_config) -> None:
        data = copy.deepcopy(helium_neon_config)
        data["laser"]["wavelength_nm"] = -1
        response = client.post("/api/v1/scenario", json={"config": data})

        assert response.status_code == 422
        body = response.json()
        assert body["error_type"] == "validation"
        assert body["details"][0]["path"] == "laser.wavelength_nm"

    def test_evaluate_blocking_advisory_error(
        self, client: TestClient, helium_neon_config
    ) -> None:
        data = copy.deepcopy(helium_neon_config)
        data["laser"]["beam_diameter_mm"] = 0
        response = client.post("/api/v1/scenario", json={"config": data})

        assert response.status_code == 422
        assert response.json()["error_type"] == "evaluation"

    def test_validate(self, client: TestClient, helium_neon_config) -> None:
        response = client.post("/api/v1/scenario/validate", json={"config": helium_neon_config})

        assert response.status_code == 200
        assert response.json()["is_valid"] is True

    def test_validate_reports_schema_errors_in_body(self, client: TestClient) -> None:
        response = client.post("/api/v1/scenario/validate", json={"config": {"laser": {}}})

        assert response.status_code == 200
        data = response.json()
        assert data["is_valid"] is False
        assert data["errors"]

    def test_validate_warnings(self, client: TestClient, helium_neon_config) -> None:
        data = copy.deepcopy(helium_neon_config)
        data["laser"]["divergence_mrad"] = 0
        response = client.post("/api/v1/scenario/validate", json={"config": data})

        body = response.json()
        assert body["is_valid"] is True
        assert body["warnings"][0]["path"] == "laser.divergence_mrad"
