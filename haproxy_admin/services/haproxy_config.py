"""
HAProxy configuration file store
Reads and writes haproxy.cfg and implements frontend/backend CRUD on top of it.

Every operation re-reads the file; nothing is cached. There is no locking,
concurrent read-modify-write cycles race and the last writer wins.
"""

import logging
import os
import tempfile
from typing import List, Optional

from haproxy_admin import config
from haproxy_admin.exceptions import ConfigFileError, EntityConflictError, EntityNotFoundError
from haproxy_admin.models.config import Backend, Configuration, Frontend
from haproxy_admin.services.haproxy_service import HAProxyService
from haproxy_admin.utils.haproxy_config_generator import generate_haproxy_config
from haproxy_admin.utils.haproxy_config_parser import parse_haproxy_config

logger = logging.getLogger("haproxy_admin.config")

ENCODING = "utf-8"


class HAProxyConfigStore:
    """File accessor for the HAProxy configuration"""

    def __init__(
        self,
        config_path: str = config.HAPROXY_CONFIG_FILE_PATH,
        service: Optional[HAProxyService] = None,
        reload_on_save: bool = config.HAPROXY_RELOAD_ON_SAVE,
    ):
        self.config_path = config_path
        self.service = service
        self.reload_on_save = reload_on_save

    # Raw text

    def read_raw_text(self) -> str:
        try:
            with open(self.config_path, "r", encoding=ENCODING) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigFileError("Unable to read the configuration file", cause=e) from e

    def write_raw_text(self, contents: str):
        """Replace the file contents, without reloading HAProxy"""
        directory = os.path.dirname(os.path.abspath(self.config_path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".haproxy-", suffix=".cfg", dir=directory)
            with os.fdopen(fd, "w", encoding=ENCODING) as f:
                f.write(contents)
            if os.path.exists(self.config_path):
                os.chmod(tmp_path, os.stat(self.config_path).st_mode & 0o7777)
            os.replace(tmp_path, self.config_path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise ConfigFileError("Error while saving the configuration file", cause=e) from e
        logger.info(f"Configuration written to {self.config_path} ({len(contents)} bytes)")

    def save_raw_text(self, contents: str, reload: Optional[bool] = None) -> bool:
        """Persist raw text, then reload HAProxy if requested. Returns True if reloaded"""
        self.write_raw_text(contents)
        return self._reload_after_save(reload)

    # Structured

    def read_configuration(self) -> Configuration:
        return parse_haproxy_config(self.read_raw_text())

    def write_configuration(self, configuration: Configuration, reload: Optional[bool] = None) -> bool:
        """Persist the configuration, then reload HAProxy if requested. Returns True if reloaded"""
        self.write_raw_text(generate_haproxy_config(configuration))
        return self._reload_after_save(reload)

    def _reload_after_save(self, reload: Optional[bool]) -> bool:
        should_reload = self.reload_on_save if reload is None else reload
        if not should_reload or self.service is None:
            return False
        self.service.reload()
        return True

    # Frontends

    def list_frontends(self) -> List[Frontend]:
        return self.read_configuration().frontends

    def get_frontend(self, name: str) -> Frontend:
        frontend = self.read_configuration().get_frontend(name)
        if frontend is None:
            raise EntityNotFoundError("frontend", name)
        return frontend

    def create_frontend(self, frontend: Frontend, reload: Optional[bool] = None) -> bool:
        configuration = self.read_configuration()
        if configuration.get_frontend(frontend.name) is not None:
            raise EntityConflictError("frontend", frontend.name)
        configuration.frontends.append(frontend)
        return self.write_configuration(configuration, reload)

    def update_frontend(self, name: str, changes: dict, reload: Optional[bool] = None) -> bool:
        configuration = self.read_configuration()
        frontend = configuration.get_frontend(name)
        if frontend is None:
            raise EntityNotFoundError("frontend", name)
        _apply_changes(frontend, changes, ("mode", "binds", "default_backend"))
        return self.write_configuration(configuration, reload)

    def delete_frontend(self, name: str, reload: Optional[bool] = None) -> bool:
        configuration = self.read_configuration()
        frontend = configuration.get_frontend(name)
        if frontend is None:
            raise EntityNotFoundError("frontend", name)
        configuration.frontends.remove(frontend)
        return self.write_configuration(configuration, reload)

    # Backends

    def list_backends(self) -> List[Backend]:
        return self.read_configuration().backends

    def get_backend(self, name: str) -> Backend:
        backend = self.read_configuration().get_backend(name)
        if backend is None:
            raise EntityNotFoundError("backend", name)
        return backend

    def create_backend(self, backend: Backend, reload: Optional[bool] = None) -> bool:
        configuration = self.read_configuration()
        if configuration.get_backend(backend.name) is not None:
            raise EntityConflictError("backend", backend.name)
        if not backend.servers:
            logger.warning(f"Backend '{backend.name}' is created without servers")
        configuration.backends.append(backend)
        return self.write_configuration(configuration, reload)

    def update_backend(self, name: str, changes: dict, reload: Optional[bool] = None) -> bool:
        configuration = self.read_configuration()
        backend = configuration.get_backend(name)
        if backend is None:
            raise EntityNotFoundError("backend", name)
        _apply_changes(backend, changes, ("mode", "servers"))
        return self.write_configuration(configuration, reload)

    def delete_backend(self, name: str, reload: Optional[bool] = None) -> bool:
        configuration = self.read_configuration()
        backend = configuration.get_backend(name)
        if backend is None:
            raise EntityNotFoundError("backend", name)
        configuration.backends.remove(backend)
        return self.write_configuration(configuration, reload)


def _apply_changes(entity, changes: dict, allowed_fields):
    """Set the allowed fields on entity, name is never changed"""
    for key, value in changes.items():
        if key in allowed_fields:
            setattr(entity, key, value)
        else:
            logger.debug(f"Ignoring non-editable field '{key}' on {type(entity).__name__.lower()}")
