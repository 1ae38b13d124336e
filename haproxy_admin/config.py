"""
HAProxy Admin settings
All values come from the environment and are fixed for the process lifetime
"""

import os

HAPROXY_CONFIG_FILE_PATH = os.getenv("HAPROXY_CONFIG_FILE_PATH", "/etc/haproxy/haproxy.cfg")
HAPROXY_SERVICE_NAME = os.getenv("HAPROXY_SERVICE_NAME", "haproxy")
HAPROXY_BIN = os.getenv("HAPROXY_BIN", "haproxy")
SYSTEMCTL_BIN = os.getenv("SYSTEMCTL_BIN", "systemctl")
JOURNALCTL_BIN = os.getenv("JOURNALCTL_BIN", "journalctl")

# Saving the configuration reloads HAProxy unless disabled
HAPROXY_RELOAD_ON_SAVE = os.getenv("HAPROXY_RELOAD_ON_SAVE", "true").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

DEFAULT_LOG_LIMIT = 100
MAX_LOG_LIMIT = 1000
