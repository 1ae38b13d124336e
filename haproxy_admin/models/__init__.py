from haproxy_admin.models.config import Server, Bind, Backend, Frontend, Configuration
from haproxy_admin.models.frontend import BindConfig, FrontendConfig, FrontendConfigUpdate
from haproxy_admin.models.backend import ServerConfig, BackendConfig, BackendConfigUpdate
from haproxy_admin.models.haproxy import (
    ValidationResult, ServiceStatus, LogEntry, ConfigFileContents, ActionResponse,
    UPTIME_NOT_RUNNING, UPTIME_UNAVAILABLE,
)
