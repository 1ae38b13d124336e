"""
Configuration File API
Raw access to haproxy.cfg for the text editor, optionally parsed
"""

from fastapi import APIRouter, Depends, HTTPException
import logging

from haproxy_admin.dependencies import get_config_store
from haproxy_admin.exceptions import ConfigFileError, ServiceCommandError
from haproxy_admin.models import ConfigFileContents
from haproxy_admin.services.haproxy_config import HAProxyConfigStore
from haproxy_admin.utils.haproxy_config_parser import parse_haproxy_config_with_warnings
from haproxy_admin.utils.logging_config import PerformanceLogger

router = APIRouter(prefix="/api/config-file", tags=["Configuration File"])
logger = logging.getLogger("haproxy_admin.config")


@router.get("")
def get_config_file(parse: bool = False, store: HAProxyConfigStore = Depends(get_config_store)):
    """Return the configuration file, as text or parsed when `parse=true`"""
    try:
        contents = store.read_raw_text()
    except ConfigFileError as e:
        logger.error(f"Failed to read configuration file: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if not parse:
        return {"contents": contents}

    with PerformanceLogger(logger, "config_parse", config_size=len(contents)):
        result = parse_haproxy_config_with_warnings(contents)
    configuration = result.configuration

    return {
        "contents": configuration.to_dict(),
        "warnings": result.warnings,
        "dangling_references": [
            {"frontend": frontend, "default_backend": backend}
            for frontend, backend in configuration.dangling_references()
        ],
    }


@router.post("", status_code=201)
def save_config_file(request: ConfigFileContents, store: HAProxyConfigStore = Depends(get_config_store)):
    """Overwrite the configuration file with raw text from the editor"""
    try:
        reloaded = store.save_raw_text(request.contents)
        logger.info(f"Configuration file saved from editor ({len(request.contents)} bytes)")
        return {"message": "Configuration file saved successfully", "reloaded": reloaded}
    except ServiceCommandError as e:
        logger.error(f"Configuration file saved but reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration saved but reload failed: {e}")
    except ConfigFileError as e:
        logger.error(f"Failed to save configuration file: {e}")
        raise HTTPException(status_code=500, detail=str(e))
