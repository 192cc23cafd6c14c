import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from socialnet.config import get_settings
from socialnet.domain.exceptions import DomainError
from socialnet.infrastructure.database import engine, initialize_database
from socialnet.infrastructure.realtime import session_registry
from socialnet.infrastructure.storage import UPLOADS_URL_PREFIX, get_upload_root
from socialnet.infrastructure.store import build_memory_store
from socialnet.interfaces.api.routes import register_routes
from socialnet.interfaces.api.routes_helpers import GENERIC_SERVER_ERROR, to_http_exception

logger = logging.getLogger("socialnet")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos al arrancar y libera los recursos al cerrar."""

    if app.state.memory_store is None:
        initialize_database()
    yield
    session_registry.clear()
    engine.dispose()


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Datos inválidos"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Datos inválidos")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Translate errors into the ``{"detail": ...}`` bodies the clients expect."""

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": _first_validation_message(exc)},
        )

    @app.exception_handler(DomainError)
    async def handle_domain_error(_: Request, exc: DomainError) -> JSONResponse:
        http_exc = to_http_exception(exc)
        if http_exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Unhandled domain failure: %s", exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content={"detail": http_exc.detail},
            headers=http_exc.headers,
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(_: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("Database error", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": GENERIC_SERVER_ERROR},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unexpected error", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": GENERIC_SERVER_ERROR},
        )


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="SocialNet API", lifespan=lifespan)
    app.state.memory_store = build_memory_store()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    app.mount(
        UPLOADS_URL_PREFIX,
        StaticFiles(directory=str(get_upload_root())),
        name="uploads",
    )
    return app


app = create_app()
