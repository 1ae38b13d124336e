from fastapi import APIRouter, Depends, HTTPException
from dataclasses import asdict
import logging

from haproxy_admin.dependencies import get_config_store
from haproxy_admin.exceptions import (
    ConfigFileError, EntityConflictError, EntityNotFoundError, ServiceCommandError,
)
from haproxy_admin.models import BackendConfig, BackendConfigUpdate
from haproxy_admin.services.haproxy_config import HAProxyConfigStore

router = APIRouter(prefix="/api/backends", tags=["backends"])
logger = logging.getLogger("haproxy_admin.backends")


@router.get("", summary="Get All Backends", response_description="List of backends with servers")
def get_backends(store: HAProxyConfigStore = Depends(get_config_store)):
    """
    # Get All Backends

    ## Example Response
    ```json
    [
      {
        "name": "web-backend",
        "mode": "http",
        "servers": [
          {"name": "web1", "ip_address": "10.0.0.1", "port": 8080, "check": true}
        ]
      }
    ]
    ```
    """
    try:
        return [asdict(backend) for backend in store.list_backends()]
    except ConfigFileError as e:
        logger.error(f"Failed to list backends: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/{name}", summary="Get Backend")
def get_backend(name: str, store: HAProxyConfigStore = Depends(get_config_store)):
    try:
        return asdict(store.get_backend(name))
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConfigFileError as e:
        logger.error(f"Failed to read backend '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("", status_code=201, summary="Create Backend")
def create_backend(backend: BackendConfig, store: HAProxyConfigStore = Depends(get_config_store)):
    """
    # Create Backend

    Adds a backend to the configuration file. The name must be unique.
    A backend without servers is accepted but will not serve traffic.
    """
    try:
        reloaded = store.create_backend(backend.to_entity())
        logger.info(f"Backend '{backend.name}' created with {len(backend.servers)} server(s)")
        return {"message": f"Backend '{backend.name}' created successfully", "reloaded": reloaded}
    except EntityConflictError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ServiceCommandError as e:
        logger.error(f"Backend '{backend.name}' saved but reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration saved but reload failed: {e}")
    except ConfigFileError as e:
        logger.error(f"Failed to create backend '{backend.name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{name}", summary="Update Backend")
def update_backend(name: str, backend_update: BackendConfigUpdate,
                   store: HAProxyConfigStore = Depends(get_config_store)):
    try:
        reloaded = store.update_backend(name, backend_update.to_changes())
        logger.info(f"Backend '{name}' updated")
        return {"message": f"Backend '{name}' updated successfully", "reloaded": reloaded}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ServiceCommandError as e:
        logger.error(f"Backend '{name}' saved but reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration saved but reload failed: {e}")
    except ConfigFileError as e:
        logger.error(f"Failed to update backend '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{name}", summary="Delete Backend")
def delete_backend(name: str, store: HAProxyConfigStore = Depends(get_config_store)):
    try:
        reloaded = store.delete_backend(name)
        logger.info(f"Backend '{name}' deleted")
        return {"message": f"Backend '{name}' deleted successfully", "reloaded": reloaded}
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ServiceCommandError as e:
        logger.error(f"Backend '{name}' removed but reload failed: {e}")
        raise HTTPException(status_code=500, detail=f"Configuration saved but reload failed: {e}")
    except ConfigFileError as e:
        logger.error(f"Failed to delete backend '{name}': {e}")
        raise HTTPException(status_code=500, detail=str(e))
