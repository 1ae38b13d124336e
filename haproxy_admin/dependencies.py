"""
FastAPI dependency providers, overridden in tests
"""

from haproxy_admin import config
from haproxy_admin.services.haproxy_config import HAProxyConfigStore
from haproxy_admin.services.haproxy_service import HAProxyService


def get_haproxy_service() -> HAProxyService:
    return HAProxyService(
        service_name=config.HAPROXY_SERVICE_NAME,
        config_path=config.HAPROXY_CONFIG_FILE_PATH,
        haproxy_bin=config.HAPROXY_BIN,
        systemctl_bin=config.SYSTEMCTL_BIN,
        journalctl_bin=config.JOURNALCTL_BIN,
    )


def get_config_store() -> HAProxyConfigStore:
    return HAProxyConfigStore(
        config_path=config.HAPROXY_CONFIG_FILE_PATH,
        service=get_haproxy_service(),
        reload_on_save=config.HAPROXY_RELOAD_ON_SAVE,
    )
