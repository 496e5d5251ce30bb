"""
Application factory and entry point for the Library System API.

``create_app`` wires configuration, the database and the resource routers
into a FastAPI application; ``main`` serves it with uvicorn.
"""

import logging
import re
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from . import __version__
from .api import install_error_handlers, routers
from .config import ApiConfig, get_config, set_config
from .database import get_db_manager, reset_db_manager

logger = logging.getLogger(__name__)


# Last segment of the Users routes that carry a plaintext password:
# /Users/{username}/{password}, /Users/{user_id}/{password} and
# /Users/IsPasswordUsedByUser/{user_id}/{password}
_PASSWORD_PATH = re.compile(
    r"(/Users/(?:IsPasswordUsedByUser/[^/?]+|(?!DoesUsernameExist/)[^/?]+)/)[^/?]+"
)


def redact_password_path(path: str) -> str:
    """Mask the password segment of a request path."""
    return _PASSWORD_PATH.sub(r"\1***", path)


class PasswordPathFilter(logging.Filter):
    """Redacts passwords from uvicorn access log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_password_path(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def configure_logging(config: ApiConfig) -> None:
    """Send log records to stderr at the configured level."""
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not config.is_development:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    db_manager = get_db_manager()
    db_manager.init_database()
    logger.info("%s v%s ready", app.title, app.version)
    try:
        yield
    finally:
        reset_db_manager()


def create_app(config: ApiConfig | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Explicit configuration; installed as the process-wide config.
            When None, the environment-derived configuration is used.
    """
    if config is not None:
        set_config(config)
    config = get_config()

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        debug=config.debug,
        lifespan=lifespan,
    )
    install_error_handlers(app)

    for router in routers:
        app.include_router(router, prefix=config.api_prefix)

    @app.get("/health", tags=["Health"])
    def health() -> JSONResponse:
        """Report whether the store is reachable."""
        healthy = get_db_manager().verify_connection()
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={"status": "ok" if healthy else "unavailable", "version": __version__},
        )

    return app


def main() -> None:
    """Console entry point: ``library-api``."""
    config = get_config()
    configure_logging(config)

    logger.info("=" * 60)
    logger.info("Library System API")
    logger.info("Version: %s", config.app_version)
    logger.info("Listening on: http://%s:%s%s", config.http_host, config.http_port, config.api_prefix)
    logger.info("Debug Mode: %s", config.debug)
    logger.info("=" * 60)

    try:
        server_config = uvicorn.Config(
            create_app(config),
            host=config.http_host,
            port=config.http_port,
            log_level=config.effective_log_level.lower(),
        )
        # uvicorn.Config has applied its logging setup by now
        logging.getLogger("uvicorn.access").addFilter(PasswordPathFilter())
        uvicorn.Server(server_config).run()
    except KeyboardInterrupt:
        logger.info("Server stopped by user")


if __name__ == "__main__":
    main()
