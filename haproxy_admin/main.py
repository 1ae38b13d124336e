"""
HAProxy Admin API
Entry point: uvicorn haproxy_admin.main:app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from haproxy_admin import __version__, config
from haproxy_admin.routers import backend, frontend, haproxy
from haproxy_admin.routers import config as config_router
from haproxy_admin.utils.logging_config import setup_logging

logger = logging.getLogger("haproxy_admin")


def create_app() -> FastAPI:
    setup_logging(config.LOG_LEVEL)

    app = FastAPI(
        title="HAProxy Admin",
        description="Manage the local HAProxy configuration file and service",
        version=__version__,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(config_router.router)
    app.include_router(frontend.router)
    app.include_router(backend.router)
    app.include_router(haproxy.router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok", "config_path": config.HAPROXY_CONFIG_FILE_PATH}

    logger.info(f"HAProxy Admin managing {config.HAPROXY_CONFIG_FILE_PATH} "
                f"(service '{config.HAPROXY_SERVICE_NAME}')")
    return app


app = create_app()
