"""
Tests for the public help resources route.
"""


def test_default_region(client):
    response = client.get("/api/help-resources")

    assert response.status_code == 200
    data = response.json()
    assert data["country"] == "CO"
    assert len(data["items"]) == 8
    assert set(data["items"][0]) == {"name", "contact", "hours"}


def test_explicit_region(client):
    response = client.get("/api/help-resources", params={"region": "co"})
    assert response.json()["country"] == "CO"


def test_unknown_region(client):
    response = client.get("/api/help-resources", params={"region": "ZZ"})

    assert response.status_code == 404
    assert "error" in response.json()


def test_no_auth_required(client):
    response = client.get("/api/help-resources")
    assert "www-authenticate" not in response.headers
