def test_root(client):
    assert client.get("/").json()["message"] == "EventFlow API"


def test_health_without_redis(client):
    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["redis"]["connected"] is False
    assert body["live_connections"] == 0


def test_validation_errors_are_serializable(client, login, make_user):
    login(make_user("client"))
    response = client.post("/reviews", json={"bookingId": "b", "rating": 9})

    assert response.status_code == 422
    assert response.json()["detail"][0]["loc"] == ["body", "rating"]
