def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok", "database": "ok"}


def test_unknown_route_uses_error_body(client):
    resp = client.get("/no-such-route")

    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"
