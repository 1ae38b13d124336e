"""
HAProxy Service API
Lifecycle actions, configuration check, status and logs of the local HAProxy
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List
import logging

from haproxy_admin import config
from haproxy_admin.dependencies import get_haproxy_service
from haproxy_admin.exceptions import ServiceCommandError, UnknownActionError
from haproxy_admin.models import ActionResponse, LogEntry, ServiceStatus, ValidationResult
from haproxy_admin.services.haproxy_service import HAProxyService

router = APIRouter(prefix="/api/haproxy", tags=["HAProxy Service"])
logger = logging.getLogger("haproxy_admin.service")

ACTION_MESSAGES = {
    "start": "Service started successfully",
    "stop": "Service stopped successfully",
    "restart": "Service restarted successfully",
    "reload": "Configuration reloaded successfully",
}


@router.get("/status", response_model=ServiceStatus)
def get_status(service: HAProxyService = Depends(get_haproxy_service)):
    return service.get_status()


@router.get("/logs", response_model=List[LogEntry])
def get_logs(
    limit: int = Query(config.DEFAULT_LOG_LIMIT, ge=1, le=config.MAX_LOG_LIMIT),
    service: HAProxyService = Depends(get_haproxy_service),
):
    """Most recent HAProxy journal entries, empty when the journal cannot be read"""
    return service.get_logs(limit)


@router.post("/{action}")
def run_action(action: str, service: HAProxyService = Depends(get_haproxy_service)):
    """
    # Run Service Action

    `start`, `stop`, `restart`, `reload` or `validate`.
    `validate` always answers 200 with `{valid, message}`, an invalid
    configuration is not an error.
    """
    try:
        result = service.run_action(action)
    except UnknownActionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ServiceCommandError as e:
        logger.error(f"HAProxy action '{action}' failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if isinstance(result, ValidationResult):
        if not result.valid:
            logger.warning(f"Configuration check failed: {result.message}")
        return result

    logger.info(f"HAProxy action '{action}' completed")
    return ActionResponse(message=ACTION_MESSAGES[action], reloaded=action == "reload")
