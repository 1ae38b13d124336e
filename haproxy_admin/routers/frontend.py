from fastapi import APIRouter, Depends, HTTPException
from dataclasses import asdict
import logging

from haproxy_admin.dependencies import get_config_store
from haproxy_admin.exceptions import (
    ConfigFileError, EntityConflictError, EntityNotFoundError, ServiceCommandError,
)
from haproxy_admin.models import FrontendConfig, FrontendConfigUpdate
from haproxy_admin.services.haproxy_config import HAProxyConfigStore

router = APIRouter(prefix="/api/frontends", tags=["frontends"])
logger = logging.getLogger("haproxy_admin.frontends")


@router.get("", summary="Get All Frontends", response_description="List of frontend configurations")
def get_frontends(store: HAProxyConfigStore = Depends(get_config_store)):
    """
    # Get All Frontends

    Frontends parsed from the configuration file, in file order.

    ## Example Response
    ```json
    [
      {
        "name": "web-frontend",
        "mode": "http",
        "binds": [{"ip_address": "*", "port": 80}],
        "default_backend": "web-backend"
      }
    ]
    ```
    """
    try:
        return [asdict(frontend) for frontend in store.list_frontends()]
    except ConfigFileError as e:
        logger.error(f"Failed to list frontends: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{name}", summary="Get Frontend")
def get_frontend(name: str, store: HAProxyConfigStore = Depends(get_config_store)):
    try:
        return asdict(store.get_frontend(name))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConfigFileError as e:
        logger.error(f"Failed to read frontend '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", status_code=201, summary="Create Frontend")
def create_frontend(frontend: FrontendConfig, store: HAProxyConfigStore = Depends(get_config_store)):
    """
    # Create Frontend

    Adds a frontend to the configuration file. The name must be unique.
    `default_backend` is stored as given, even if no backend has that name yet.
    """
    try:
        reloaded = store.create_frontend(frontend.to_entity())
        logger.info(f"Frontend '{frontend.name}' created")
        return {"message": f"Frontend '{frontend.name}' created successfully", "reloaded": reloaded}
    except EntityConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ServiceCommandError as e:
        logger.error(f"Frontend '{frontend.name}' saved but reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration saved but reload failed: {e}")
    except ConfigFileError as e:
        logger.error(f"Failed to create frontend '{frontend.name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{name}", summary="Update Frontend")
def update_frontend(name: str, frontend_update: FrontendConfigUpdate,
                    store: HAProxyConfigStore = Depends(get_config_store)):
    try:
        reloaded = store.update_frontend(name, frontend_update.to_changes())
        logger.info(f"Frontend '{name}' updated")
        return {"message": f"Frontend '{name}' updated successfully", "reloaded": reloaded}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ServiceCommandError as e:
        logger.error(f"Frontend '{name}' saved but reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration saved but reload failed: {e}")
    except ConfigFileError as e:
        logger.error(f"Failed to update frontend '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{name}", summary="Delete Frontend")
def delete_frontend(name: str, store: HAProxyConfigStore = Depends(get_config_store)):
    try:
        reloaded = store.delete_frontend(name)
        logger.info(f"Frontend '{name}' deleted")
        return {"message": f"Frontend '{name}' deleted successfully", "reloaded": reloaded}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ServiceCommandError as e:
        logger.error(f"Frontend '{name}' removed but reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration saved but reload failed: {e}")
    except ConfigFileError as e:
        logger.error(f"Failed to delete frontend '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))
