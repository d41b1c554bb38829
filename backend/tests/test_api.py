"""
HTTP API tests against the in-process app.

Test Coverage:
1. GET /api/, /api/bands, /api/bands/{region}
2. GET /api/balun/cores, /api/balun/presets, /api/balun/wires
3. POST /api/balun/design - default design, power-based core choice, fixed turns, unknown core, bad frequency range
4. POST /api/balun/validate, /api/balun/winding-topology, /api/balun/hybrid
5. POST /api/balun/band-power, /api/balun/swr-curve
6. GET /api/inductor/coax-cables, POST /api/inductor/calculate, /api/inductor/frequency-response
"""

import pytest
from fastapi.testclient import TestClient

from server import app


@pytest.fixture(scope="module")
def api_client():
    """Shared in-process client"""
    with TestClient(app) as client:
        yield client


class TestPublicRoutes:

    def test_root(self, api_client):
        response = api_client.get("/api/")
        assert response.status_code == 200
        assert "message" in response.json()

    def test_bands(self, api_client):
        response = api_client.get("/api/bands")
        assert response.status_code == 200
        names = [b["name"] for b in response.json()]
        assert "80m" in names and "10m" in names

    def test_region_bands(self, api_client):
        response = api_client.get("/api/bands/Region 2")
        assert response.status_code == 200
        assert response.json()["3.650"]["max"] == 4.0

    def test_unknown_region(self, api_client):
        assert api_client.get("/api/bands/Region 7").status_code == 404


class TestBalunCatalog:

    def test_cores(self, api_client):
        response = api_client.get("/api/balun/cores")
        assert response.status_code == 200
        ids = [c["id"] for c in response.json()]
        assert "FT140-43" in ids and "FT240-61" in ids

    def test_presets(self, api_client):
        response = api_client.get("/api/balun/presets")
        assert response.status_code == 200
        presets = response.json()
        assert len(presets) == 5
        assert all("suggested_core_model" in p and "config" in p for p in presets)

    def test_wires(self, api_client):
        gauges = [w["gauge"] for w in api_client.get("/api/balun/wires").json()]
        assert gauges == sorted(gauges) and 18 in gauges


class TestBalunDesign:

    def test_default_design(self, api_client):
        response = api_client.post("/api/balun/design", json={})
        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        body = response.json()
        design = body["design"]
        assert design["config"]["primary_turns"] == 6
        assert design["core"]["id"] == "FT140-43"
        assert design["winding_info"]["construction"] == "classical"
        assert body["validation"]["valid"] is True
        print(f"✓ {design['config']['primary_turns']} turns, loss {design['core_loss_at_min_freq']:.2f} W")

    def test_fixed_turns(self, api_client):
        payload = {"core_id": "FT240-43", "config": {"primary_turns": 8, "min_frequency": 1.8}}
        design = api_client.post("/api/balun/design", json=payload).json()["design"]
        assert design["config"]["primary_turns"] == 8
        assert design["core"]["id"] == "FT240-43"

    def test_high_power_picks_larger_core(self, api_client):
        response = api_client.post("/api/balun/design", json={"config": {"power": 1500}})
        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        assert response.json()["design"]["core"]["id"] == "FT240-43"

    def test_explicit_core_overrides_power_choice(self, api_client):
        payload = {"core_id": "FT140-43", "config": {"power": 1500}}
        design = api_client.post("/api/balun/design", json=payload).json()["design"]
        assert design["core"]["id"] == "FT140-43"

    def test_unknown_core(self, api_client):
        response = api_client.post("/api/balun/design", json={"core_id": "FT999-99"})
        assert response.status_code == 404

    def test_min_above_max_rejected(self, api_client):
        payload = {"config": {"min_frequency": 30, "max_frequency": 3.5}}
        assert api_client.post("/api/balun/design", json=payload).status_code == 422

    def test_negative_power_rejected(self, api_client):
        assert api_client.post("/api/balun/design", json={"config": {"power": -5}}).status_code == 422

    def test_validate_infeasible(self, api_client):
        payload = {"config": {"primary_turns": 2, "min_frequency": 1.8, "power": 1500,
                              "operation_mode": "CONTINUOUS"}}
        response = api_client.post("/api/balun/validate", json=payload)
        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is False
        assert body["messages"][0]["type"] == "error"

    def test_winding_topology(self, api_client):
        payload = {"input_impedance": 50, "output_impedance": 100}
        body = api_client.post("/api/balun/winding-topology", json=payload).json()
        assert body["construction"] == "hybrid"

    def test_hybrid(self, api_client):
        payload = {"config": {"input_impedance": 50, "output_impedance": 450}}
        body = api_client.post("/api/balun/hybrid", json=payload).json()
        assert body["intermediate_impedance"] == 100
        assert body["total_core_loss"] == pytest.approx(
            body["balun"]["core_loss_at_min_freq"] + body["unun"]["core_loss_at_min_freq"])

    def test_band_power_and_swr(self, api_client):
        payload = {"core_id": "FT140-43", "turns": 6}
        bands = api_client.post("/api/balun/band-power", json=payload).json()
        assert len(bands) == 13
        curve = api_client.post("/api/balun/swr-curve", json=payload).json()
        assert len(curve) == 29


class TestInductorRoutes:

    def test_coax_cables(self, api_client):
        ids = [c["id"] for c in api_client.get("/api/inductor/coax-cables").json()]
        assert "rg58" in ids and "rg213" in ids

    def test_calculate_with_band(self, api_client):
        payload = {"coax_type": "rg58", "former_diameter": 50, "turn_count": 10, "ham_band": "40m"}
        response = api_client.post("/api/inductor/calculate", json=payload)
        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        body = response.json()
        assert body["frequency"] == 7.15
        assert body["verdict"]["performance_level"] in ("poor", "usable", "excellent")

    def test_calculate_without_frequency(self, api_client):
        payload = {"coax_type": "rg58", "former_diameter": 50, "turn_count": 10}
        assert api_client.post("/api/inductor/calculate", json=payload).status_code == 400

    def test_unknown_coax(self, api_client):
        payload = {"coax_type": "rg999", "former_diameter": 50, "turn_count": 10, "frequency": 7.0}
        assert api_client.post("/api/inductor/calculate", json=payload).status_code == 404

    def test_frequency_response(self, api_client):
        payload = {
            "parameters": {"coax_type": "rg58", "former_diameter": 50, "turn_count": 10},
            "start_mhz": 1.0, "stop_mhz": 300.0, "num_points": 40,
        }
        response = api_client.post("/api/inductor/frequency-response", json=payload)
        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"
        body = response.json()
        assert len(body["points"]) == 40
        srf = body["self_resonant_freq_mhz"]
        for p in body["points"]:
            if p["frequency"] >= srf:
                assert p["impedance_magnitude"] is None and p["over_srf"] is True
