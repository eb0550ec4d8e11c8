from app import create_app


def _client():
    app = create_app("TestingConfig")
    return app.test_client()


def test_categories_endpoint_lists_catalog():
    client = _client()
    response = client.get("/api/unit_converter/categories")
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    names = [item["name"] for item in payload["data"]["categories"]]
    assert "Length" in names
    assert "Fuel Economy" in names
    assert "max-age" in response.headers["Cache-Control"]


def test_units_endpoint_rejects_unknown_category():
    client = _client()
    response = client.get("/api/unit_converter/units/luminosity")
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "unit.invalid_category"


def test_convert_endpoint_success():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={"value": 1000, "from_unit": "m", "to_unit": "ft", "category": "Length"},
    )
    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["data"]["unit"] == "ft"
    assert abs(payload["data"]["value"] - 3280.8398950131236) < 1e-6


def test_convert_endpoint_rejects_unit_outside_category():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={"value": 1, "from_unit": "m", "to_unit": "kg", "category": "Length"},
    )
    assert response.status_code == 400
    payload = response.get_json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "unit.invalid_unit"


def test_convert_endpoint_reports_undefined_reciprocal():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={
            "value": 0,
            "from_unit": "Hz",
            "to_unit": "λ m",
            "category": "Electromagnetic Wave",
        },
    )
    assert response.status_code == 422
    assert response.get_json()["error"]["code"] == "unit.undefined"


def test_convert_endpoint_rejects_extra_fields():
    client = _client()
    response = client.post(
        "/api/unit_converter/convert",
        json={"value": 1, "from_unit": "m", "to_unit": "ft", "category": "Length", "x": 1},
    )
    assert response.status_code == 400
    assert response.get_json()["error"]["code"] == "unit.invalid_request"


def test_query_endpoint():
    client = _client()
    response = client.post("/api/unit_converter/queries", json={"query": "2 hr to min"})
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["value"] == 120
    assert data["unit"] == "min"
    assert data["category"] == "Time"
