"""FastAPI application entry point."""

import os
import sys
import time
import logging
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before building services that read env vars (like BCRYPT_ROUNDS)
load_dotenv()

# Add src to path
# main.py is at src/api/main.py, so src is 2 levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.dependencies import build_user_service
from api.errors import register_error_handlers
from api.routes import health, users
from port.password_hasher import PasswordHasher
from port.user_repository import UserRepository
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "User Accounts API"
DISTRIBUTION_NAME = "user-accounts-api"

try:
    VERSION = version(DISTRIBUTION_NAME)
except PackageNotFoundError:
    VERSION = "0.0.0"


def _configure_cors(app: FastAPI) -> None:
    # If CORS_ORIGINS="*": allow_credentials must be False (browsers don't support credentials with wildcard)
    # For production, set CORS_ORIGINS env var with comma-separated list of allowed origins
    cors_origins_env = os.getenv("CORS_ORIGINS", "*")

    if cors_origins_env == "*":
        cors_origins = ["*"]
        allow_credentials = False
    else:
        cors_origins = [origin.strip() for origin in cors_origins_env.split(",")]
        allow_credentials = True
        logger.info(f"CORS configured with specific origins: {cors_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def create_app(
    repo: UserRepository | None = None,
    hasher: PasswordHasher | None = None,
) -> FastAPI:
    """Build the application.

    The user store lives on app.state and is owned by the app instance;
    each call starts from an empty store unless one is passed in.
    """
    setup_structured_logging()

    app = FastAPI(
        title=SERVICE_NAME,
        description="User account CRUD and credential validation",
        version=VERSION,
        # /api/users/ is an unknown endpoint, not a redirect to /api/users
        redirect_slashes=False,
    )
    app.state.user_service = build_user_service(repo, hasher)
    app.state.started_at = time.monotonic()

    _configure_cors(app)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": SERVICE_NAME,
            "version": VERSION,
            "status": "running"
        }

    return app


def main() -> None:
    import uvicorn
    setup_structured_logging()
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 8000))
    logger.info("Starting server", extra={"host": host, "port": port})
    # Application logs go through structured logging; uvicorn's access log is off
    uvicorn.run(
        "api.main:create_app",
        factory=True,
        host=host,
        port=port,
        access_log=False,
    )


if __name__ == "__main__":
    main()
