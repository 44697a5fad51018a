from fastapi.testclient import TestClient

from account_platform.account_platform.account_service.routes import health

def test_hello(client):
    r = client.get("/hello")
    assert r.status_code == 200
    assert r.text == "hello world"
    assert r.headers["content-type"].startswith("text/plain")

def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"

def test_ready_with_database(client):
    r = client.get("/ready")
    assert r.status_code == 200
    assert r.json()["database"] == "connected"

def test_ready_without_database(client, monkeypatch):
    monkeypatch.setattr(health, "check_db_connection", lambda engine: False)
    r = client.get("/ready")
    assert r.status_code == 503
    assert r.json()["detail"]["database"] == "disconnected"

def test_engine_lifecycle(app):
    with TestClient(app) as c:
        c.post("/register", json={"email": "pool@example.com", "password": "pw"})
        c.post("/login", json={"email": "pool@example.com", "password": "bad"})
        c.get("/ready")
        # Every request returned its connection to the pool
        assert app.state.engine.pool.checkedout() == 0
