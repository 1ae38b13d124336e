"""
HAProxy Configuration Generator
Renders a Configuration back into haproxy.cfg text
"""

from typing import List

from haproxy_admin.models.config import Backend, Configuration, Frontend

INDENT = "    "


def _render_raw_section(header: str, lines: List[str]) -> str:
    return "\n".join([header] + [f"{INDENT}{line}" for line in lines])


def _render_frontend(frontend: Frontend) -> str:
    lines = [f"frontend {frontend.name}"]
    if frontend.mode:
        lines.append(f"{INDENT}mode {frontend.mode}")
    for bind in frontend.binds:
        lines.append(f"{INDENT}bind {bind.ip_address}:{bind.port}")
    if frontend.default_backend:
        lines.append(f"{INDENT}default_backend {frontend.default_backend}")
    return "\n".join(lines)


def _render_backend(backend: Backend) -> str:
    lines = [f"backend {backend.name}"]
    if backend.mode:
        lines.append(f"{INDENT}mode {backend.mode}")
    for server in backend.servers:
        check = " check" if server.check else ""
        lines.append(f"{INDENT}server {server.name} {server.ip_address}:{server.port}{check}")
    return "\n".join(lines)


def generate_haproxy_config(config: Configuration) -> str:
    """
    Generate HAProxy configuration text

    Sections are emitted as global, defaults, frontends then backends,
    separated by a blank line. Empty global/defaults blocks are omitted.
    """
    sections = []

    if config.global_lines:
        sections.append(_render_raw_section("global", config.global_lines))
    if config.defaults_lines:
        sections.append(_render_raw_section("defaults", config.defaults_lines))

    sections.extend(_render_frontend(frontend) for frontend in config.frontends)
    sections.extend(_render_backend(backend) for backend in config.backends)

    if not sections:
        return ""
    return "\n\n".join(sections) + "\n"
