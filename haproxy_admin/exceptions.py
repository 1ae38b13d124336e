"""
HAProxy Admin exceptions
Typed outcomes raised by the core and translated to HTTP errors by the routers
"""

from typing import Optional


class HAProxyAdminError(Exception):
    """Base class for all panel errors"""


class ConfigFileError(HAProxyAdminError):
    """The configuration file could not be read or written"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class EntityNotFoundError(HAProxyAdminError):
    """A frontend or backend referenced by name does not exist"""

    def __init__(self, entity_type: str, name: str):
        super().__init__(f"{entity_type.capitalize()} '{name}' not found")
        self.entity_type = entity_type
        self.name = name


class EntityConflictError(HAProxyAdminError):
    """A frontend or backend with the same name already exists"""

    def __init__(self, entity_type: str, name: str):
        super().__init__(f"{entity_type.capitalize()} '{name}' already exists")
        self.entity_type = entity_type
        self.name = name


class ServiceCommandError(HAProxyAdminError):
    """A service manager or haproxy command failed or could not be launched"""

    def __init__(self, action: str, message: str):
        super().__init__(f"Failed to {action} HAProxy: {message}")
        self.action = action
        self.message = message


class UnknownActionError(HAProxyAdminError):
    """Requested service action is not supported"""

    def __init__(self, action: str):
        super().__init__(f"Unknown action: {action}")
        self.action = action
