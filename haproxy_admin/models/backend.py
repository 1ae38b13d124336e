from pydantic import BaseModel, Field
from typing import Optional, List, Literal

from haproxy_admin.models.config import Backend, Server, TOKEN_PATTERN


class ServerConfig(BaseModel):
    name: str = Field(..., min_length=1, pattern=TOKEN_PATTERN)
    ip_address: str = Field(..., min_length=1, pattern=TOKEN_PATTERN)
    port: int = Field(..., ge=1, le=65535)
    check: bool = False

    def to_entity(self) -> Server:
        return Server(name=self.name, ip_address=self.ip_address, port=self.port, check=self.check)


class BackendConfig(BaseModel):
    name: str = Field(..., min_length=1, pattern=TOKEN_PATTERN)
    mode: Optional[Literal["http", "tcp"]] = None  # None inherits from defaults
    servers: List[ServerConfig] = []

    def to_entity(self) -> Backend:
        return Backend(
            name=self.name,
            mode=self.mode,
            servers=[server.to_entity() for server in self.servers],
        )


class BackendConfigUpdate(BaseModel):
    # Name comes from the URL and cannot be changed
    mode: Optional[Literal["http", "tcp"]] = None
    servers: Optional[List[ServerConfig]] = None

    def to_changes(self) -> dict:
        """Only the fields present in the request body"""
        changes = {}
        fields_set = self.model_fields_set
        if "mode" in fields_set:
            changes["mode"] = self.mode
        if "servers" in fields_set and self.servers is not None:
            changes["servers"] = [server.to_entity() for server in self.servers]
        return changes
