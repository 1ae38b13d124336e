"""
HAProxy Configuration Model
In-memory representation of the subset of haproxy.cfg managed by the panel
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

# One whitespace-free token, anything else is split or cut by the parser
TOKEN_PATTERN = r"^[^\s#]+$"
OPTIONAL_TOKEN_PATTERN = r"^[^\s#]*$"


@dataclass
class Server:
    """Backend server definition"""
    name: str
    ip_address: str
    port: int
    check: bool = False


@dataclass
class Bind:
    """Frontend listening address"""
    ip_address: str
    port: int


@dataclass
class Backend:
    """Backend definition"""
    name: str
    mode: Optional[str] = None  # None inherits from defaults
    servers: List[Server] = field(default_factory=list)


@dataclass
class Frontend:
    """Frontend definition"""
    name: str
    mode: Optional[str] = None
    binds: List[Bind] = field(default_factory=list)
    default_backend: Optional[str] = None  # Backend name, may not exist


@dataclass
class Configuration:
    """Parsed HAProxy configuration"""
    global_lines: List[str] = field(default_factory=list)
    defaults_lines: List[str] = field(default_factory=list)
    frontends: List[Frontend] = field(default_factory=list)
    backends: List[Backend] = field(default_factory=list)

    def get_frontend(self, name: str) -> Optional[Frontend]:
        for frontend in self.frontends:
            if frontend.name == name:
                return frontend
        return None

    def get_backend(self, name: str) -> Optional[Backend]:
        for backend in self.backends:
            if backend.name == name:
                return backend
        return None

    def resolve_default_backend(self, frontend: Frontend) -> Optional[Backend]:
        """Look up the backend a frontend points to, None if it is dangling"""
        if not frontend.default_backend:
            return None
        return self.get_backend(frontend.default_backend)

    def dangling_references(self) -> List[Tuple[str, str]]:
        """(frontend name, backend name) pairs whose default_backend is undefined"""
        return [
            (frontend.name, frontend.default_backend)
            for frontend in self.frontends
            if frontend.default_backend and self.resolve_default_backend(frontend) is None
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            "global": list(self.global_lines),
            "defaults": list(self.defaults_lines),
            "frontends": [asdict(f) for f in self.frontends],
            "backends": [asdict(b) for b in self.backends],
        }
