import subprocess
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from haproxy_admin.dependencies import get_config_store, get_haproxy_service
from haproxy_admin.main import app
from haproxy_admin.services.haproxy_config import HAProxyConfigStore
from haproxy_admin.services.haproxy_service import HAProxyService

SAMPLE_CONFIG = """\
global
    log /dev/log local0
    maxconn 4096

defaults
    mode http
    timeout connect 5s

# public entry point
frontend web
    bind *:80
    mode http
    option httplog
    default_backend app

backend app
    mode http
    balance roundrobin
    server s1 10.0.0.1:8080 check
    server s2 10.0.0.2:9090
"""

FIXED_NOW = datetime(2024, 1, 16, 12, 45, 30)


class FakeRunner:
    """Stands in for subprocess.run, answers by exact argument list"""

    def __init__(self):
        self.calls = []
        self.responses = {}

    def set(self, args, returncode=0, stdout="", stderr="", error=None):
        self.responses[tuple(args)] = error or subprocess.CompletedProcess(args, returncode, stdout, stderr)

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        response = self.responses.get(tuple(args))
        if isinstance(response, Exception):
            raise response
        if response is None:
            return subprocess.CompletedProcess(args, 0, "", "")
        return response


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "haproxy.cfg"
    path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return path


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def service(runner, config_file):
    return HAProxyService(
        service_name="haproxy",
        config_path=str(config_file),
        haproxy_bin="haproxy",
        systemctl_bin="systemctl",
        journalctl_bin="journalctl",
        runner=runner,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def store(config_file, service):
    return HAProxyConfigStore(config_path=str(config_file), service=service, reload_on_save=True)


@pytest.fixture
def client(store, service):
    app.dependency_overrides[get_config_store] = lambda: store
    app.dependency_overrides[get_haproxy_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
