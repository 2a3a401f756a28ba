"""
Tests for fee settings and restaurant fee profile endpoints.
"""


def test_fee_settings_default_when_unset(client):
    """Defaults are 5 per order and 2%."""
    response = client.get("/api/settings/fees")
    assert response.status_code == 200
    assert response.json() == {"platform_fee": "5", "transaction_fee_percent": "2"}


def test_update_fee_settings(client):
    """Saving creates the settings row; partial updates keep the other field."""
    response = client.put("/api/settings/fees", json={"platform_fee": "7.50"})
    assert response.status_code == 200
    assert response.json() == {"platform_fee": "7.50", "transaction_fee_percent": "2.00"}

    client.put("/api/settings/fees", json={"transaction_fee_percent": "2.5"})
    assert client.get("/api/settings/fees").json() == {
        "platform_fee": "7.50",
        "transaction_fee_percent": "2.50",
    }


def test_update_fee_settings_rejects_bad_values(client):
    """Negative fees and percentages above 100 are refused."""
    assert client.put("/api/settings/fees", json={"platform_fee": "-1"}).status_code == 422
    assert client.put("/api/settings/fees", json={"transaction_fee_percent": "101"}).status_code == 422
    assert client.put("/api/settings/fees", json={"platform_fee": "NaN"}).status_code == 422
    assert client.put("/api/settings/fees", json={"platform_fee": "1.005"}).status_code == 422


def test_invalid_request_uses_error_body(client):
    """Request validation failures share the {"error", "details"} body of domain errors."""
    response = client.put("/api/settings/fees", json={"platform_fee": "-1"})

    assert response.status_code == 422
    body = response.json()
    assert body["error"] == "Invalid request"
    assert "detail" not in body
    assert body["details"]["errors"][0]["loc"] == ["body", "platform_fee"]
    assert body["details"]["errors"][0]["type"] == "greater_than_equal"


def test_restaurant_fee_profile(client, make_restaurant):
    """Fee profile exposes commission and the declared per-restaurant fees."""
    restaurant = make_restaurant(commission_percent="15")
    data = client.get(f"/api/restaurants/{restaurant.id}/fees").json()
    assert data["restaurant_id"] == restaurant.id
    assert data["commission_percent"] == "15.00"
    assert data["platform_fee_per_order"] == "5.00"


def test_update_restaurant_fees(client, make_restaurant):
    """Partial update of commission."""
    restaurant = make_restaurant(commission_percent="15")
    response = client.patch(f"/api/restaurants/{restaurant.id}/fees", json={"commission_percent": "18"})
    assert response.status_code == 200
    assert response.json()["commission_percent"] == "18.00"
    assert response.json()["platform_fee_per_order"] == "5.00"


def test_update_restaurant_fees_validation(client, make_restaurant):
    """Negative and out of range values are refused."""
    restaurant = make_restaurant()
    url = f"/api/restaurants/{restaurant.id}/fees"
    assert client.patch(url, json={"commission_percent": "-5"}).status_code == 422
    assert client.patch(url, json={"commission_percent": "150"}).status_code == 422
    assert client.patch(url, json={"platform_fee_per_order": "-0.01"}).status_code == 422


def test_restaurant_fees_unknown_restaurant(client):
    """404 for a restaurant that does not exist."""
    assert client.get("/api/restaurants/77/fees").status_code == 404
    assert client.patch("/api/restaurants/77/fees", json={"commission_percent": "10"}).status_code == 404
