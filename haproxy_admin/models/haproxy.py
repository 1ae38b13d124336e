from pydantic import BaseModel
from typing import Literal

# Uptime placeholders
UPTIME_NOT_RUNNING = "N/A"
UPTIME_UNAVAILABLE = "unavailable"


class ValidationResult(BaseModel):
    valid: bool
    message: str


class ServiceStatus(BaseModel):
    running: bool
    enabled: bool
    version: str
    uptime: str = UPTIME_NOT_RUNNING


class LogEntry(BaseModel):
    timestamp: str
    level: Literal["info", "warning", "error"]
    message: str


class ConfigFileContents(BaseModel):
    contents: str


class ActionResponse(BaseModel):
    message: str
    reloaded: bool = False
