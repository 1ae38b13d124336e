from pydantic import BaseModel, Field
from typing import Optional, List, Literal

from haproxy_admin.models.config import Bind, Frontend, OPTIONAL_TOKEN_PATTERN, TOKEN_PATTERN


class BindConfig(BaseModel):
    ip_address: str = Field("*", min_length=1, pattern=TOKEN_PATTERN)
    port: int = Field(..., ge=1, le=65535)

    def to_entity(self) -> Bind:
        return Bind(ip_address=self.ip_address, port=self.port)


class FrontendConfig(BaseModel):
    name: str = Field(..., min_length=1, pattern=TOKEN_PATTERN)
    mode: Optional[Literal["http", "tcp"]] = None
    binds: List[BindConfig] = Field(..., min_length=1)
    default_backend: Optional[str] = Field(None, pattern=OPTIONAL_TOKEN_PATTERN)  # Backend name, not checked for existence

    def to_entity(self) -> Frontend:
        return Frontend(
            name=self.name,
            mode=self.mode,
            binds=[bind.to_entity() for bind in self.binds],
            default_backend=self.default_backend or None,
        )


class FrontendConfigUpdate(BaseModel):
    # Name comes from the URL and cannot be changed
    mode: Optional[Literal["http", "tcp"]] = None
    binds: Optional[List[BindConfig]] = Field(None, min_length=1)
    default_backend: Optional[str] = Field(None, pattern=OPTIONAL_TOKEN_PATTERN)

    def to_changes(self) -> dict:
        """Only the fields present in the request body"""
        changes = {}
        fields_set = self.model_fields_set
        if "mode" in fields_set:
            changes["mode"] = self.mode
        if "binds" in fields_set and self.binds is not None:
            changes["binds"] = [bind.to_entity() for bind in self.binds]
        if "default_backend" in fields_set:
            changes["default_backend"] = self.default_backend or None
        return changes
