"""Tests for the HTTP API."""

from tests.conftest import SAMPLE_CONFIG

RELOAD = ["systemctl", "reload", "haproxy"]


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


class TestConfigFileApi:

    def test_get_raw(self, client):
        response = client.get("/api/config-file")
        assert response.status_code == 200
        assert response.json()["contents"] == SAMPLE_CONFIG

    def test_get_parsed(self, client):
        body = client.get("/api/config-file", params={"parse": "true"}).json()
        assert body["contents"]["global"] == ["log /dev/log local0", "maxconn 4096"]
        assert body["contents"]["frontends"][0]["name"] == "web"
        assert body["contents"]["backends"][0]["servers"][0] == {
            "name": "s1", "ip_address": "10.0.0.1", "port": 8080, "check": True,
        }
        assert body["dangling_references"] == []

    def test_save_reloads(self, client, runner, config_file):
        response = client.post("/api/config-file", json={"contents": "global\n    daemon\n"})
        assert response.status_code == 201
        assert response.json()["reloaded"] is True
        assert config_file.read_text(encoding="utf-8") == "global\n    daemon\n"
        assert runner.calls == [RELOAD]

    def test_read_failure(self, client, config_file):
        config_file.unlink()
        response = client.get("/api/config-file")
        assert response.status_code == 500
        assert "Unable to read" in response.json()["detail"]


class TestFrontendApi:

    def test_list(self, client):
        assert [f["name"] for f in client.get("/api/frontends").json()] == ["web"]

    def test_get_missing(self, client):
        assert client.get("/api/frontends/nope").status_code == 404

    def test_create(self, client):
        response = client.post("/api/frontends", json={
            "name": "api", "mode": "http",
            "binds": [{"ip_address": "*", "port": 8080}],
            "default_backend": "app",
        })
        assert response.status_code == 201
        assert client.get("/api/frontends/api").json()["binds"] == [{"ip_address": "*", "port": 8080}]

    def test_create_duplicate(self, client, config_file):
        response = client.post("/api/frontends", json={"name": "web", "binds": [{"port": 81}]})
        assert response.status_code == 400
        assert config_file.read_text(encoding="utf-8") == SAMPLE_CONFIG

    def test_create_rejects_invalid_port(self, client):
        response = client.post("/api/frontends", json={"name": "x", "binds": [{"port": 70000}]})
        assert response.status_code == 422

    def test_create_requires_a_bind(self, client):
        response = client.post("/api/frontends", json={"name": "x", "binds": []})
        assert response.status_code == 422

    def test_update_ignores_name(self, client):
        response = client.put("/api/frontends/web", json={"name": "other", "default_backend": "api"})
        assert response.status_code == 200
        frontend = client.get("/api/frontends/web").json()
        assert frontend["default_backend"] == "api"
        assert frontend["mode"] == "http"

    def test_update_missing(self, client, config_file):
        response = client.put("/api/frontends/nope", json={"mode": "tcp"})
        assert response.status_code == 404
        assert config_file.read_text(encoding="utf-8") == SAMPLE_CONFIG

    def test_delete(self, client):
        assert client.delete("/api/frontends/web").status_code == 200
        assert client.get("/api/frontends").json() == []

    def test_delete_missing(self, client):
        assert client.delete("/api/frontends/nope").status_code == 404


class TestBackendApi:

    def test_create_and_get(self, client):
        response = client.post("/api/backends", json={
            "name": "api", "mode": "tcp",
            "servers": [{"name": "a1", "ip_address": "10.1.0.1", "port": 3000, "check": True}],
        })
        assert response.status_code == 201
        backend = client.get("/api/backends/api").json()
        assert backend["mode"] == "tcp"
        assert backend["servers"][0]["check"] is True

    def test_create_duplicate(self, client, config_file):
        response = client.post("/api/backends", json={"name": "app"})
        assert response.status_code == 400
        assert config_file.read_text(encoding="utf-8") == SAMPLE_CONFIG

    def test_create_rejects_unknown_mode(self, client):
        assert client.post("/api/backends", json={"name": "x", "mode": "udp"}).status_code == 422

    def test_update_servers(self, client):
        response = client.put("/api/backends/app", json={
            "servers": [{"name": "s3", "ip_address": "10.0.0.3", "port": 80}],
        })
        assert response.status_code == 200
        servers = client.get("/api/backends/app").json()["servers"]
        assert servers == [{"name": "s3", "ip_address": "10.0.0.3", "port": 80, "check": False}]

    def test_delete_missing(self, client):
        assert client.delete("/api/backends/nope").status_code == 404

    def test_reload_failure_reported(self, client, runner):
        runner.set(RELOAD, returncode=1, stderr="haproxy.service is not active, cannot reload.")
        response = client.delete("/api/backends/app")
        assert response.status_code == 500
        assert "saved but reload failed" in response.json()["detail"]


class TestServiceApi:

    def test_start(self, client, runner):
        response = client.post("/api/haproxy/start")
        assert response.status_code == 200
        assert response.json()["message"] == "Service started successfully"
        assert runner.calls == [["systemctl", "start", "haproxy"]]

    def test_failure(self, client, runner):
        runner.set(["systemctl", "stop", "haproxy"], returncode=5, stderr="Unit haproxy.service not loaded.")
        response = client.post("/api/haproxy/stop")
        assert response.status_code == 500
        assert "not loaded" in response.json()["detail"]

    def test_unknown_action(self, client):
        assert client.post("/api/haproxy/explode").status_code == 400

    def test_validate_invalid_config(self, client, runner, config_file):
        runner.set(["haproxy", "-c", "-f", str(config_file)], returncode=1,
                   stderr="[ALERT] unknown keyword 'bogus'")
        response = client.post("/api/haproxy/validate")
        assert response.status_code == 200
        assert response.json() == {"valid": False, "message": "[ALERT] unknown keyword 'bogus'"}

    def test_status_inactive(self, client, runner):
        runner.set(["systemctl", "is-active", "haproxy"], returncode=3, stdout="inactive\n")
        body = client.get("/api/haproxy/status").json()
        assert body["running"] is False
        assert body["uptime"] == "N/A"

    def test_logs(self, client, runner):
        runner.set(["journalctl", "-u", "haproxy", "-n", "10", "--no-pager"],
                   stdout="Jan 15 10:30:00 lb01 haproxy[1]: [WARNING] slow\n")
        body = client.get("/api/haproxy/logs", params={"limit": 10}).json()
        assert body == [{"timestamp": "Jan 15 10:30:00", "level": "warning", "message": "[WARNING] slow"}]

    def test_logs_limit_validated(self, client):
        assert client.get("/api/haproxy/logs", params={"limit": 0}).status_code == 422


class TestNamesMustBeSingleTokens:

    def test_server_name_with_space(self, client, config_file):
        response = client.post("/api/backends", json={
            "name": "pool",
            "servers": [{"name": "web 1", "ip_address": "10.0.0.1", "port": 80}],
        })
        assert response.status_code == 422
        assert config_file.read_text(encoding="utf-8") == SAMPLE_CONFIG

    def test_backend_name_with_comment_sign(self, client):
        assert client.post("/api/backends", json={"name": "pool#1"}).status_code == 422

    def test_server_address_with_space(self, client):
        response = client.post("/api/backends", json={
            "name": "pool",
            "servers": [{"name": "web1", "ip_address": "10.0.0.1 backup", "port": 80}],
        })
        assert response.status_code == 422

    def test_frontend_name_with_space(self, client):
        response = client.post("/api/frontends", json={"name": "web front", "binds": [{"port": 80}]})
        assert response.status_code == 422

    def test_default_backend_with_space(self, client):
        response = client.put("/api/frontends/web", json={"default_backend": "app extra"})
        assert response.status_code == 422

    def test_empty_default_backend_clears_reference(self, client):
        assert client.put("/api/frontends/web", json={"default_backend": ""}).status_code == 200
        assert client.get("/api/frontends/web").json()["default_backend"] is None

    def test_server_named_check_round_trips(self, client):
        client.post("/api/backends", json={
            "name": "pool",
            "servers": [{"name": "check", "ip_address": "10.0.0.1", "port": 80, "check": False}],
        })
        servers = client.get("/api/backends/pool").json()["servers"]
        assert servers == [{"name": "check", "ip_address": "10.0.0.1", "port": 80, "check": False}]


def test_reload_action_reports_reload(client):
    assert client.post("/api/haproxy/reload").json() == {
        "message": "Configuration reloaded successfully", "reloaded": True,
    }
    assert client.post("/api/haproxy/start").json()["reloaded"] is False


def test_config_file_not_utf8(client, config_file):
    config_file.write_bytes(b"global\n    log \xff\n")
    response = client.get("/api/frontends")
    assert response.status_code == 500
    assert "Unable to read" in response.json()["detail"]
