import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routers.ciudades import router as ciudades_router
from app.api.routers.departamentos import router as departamentos_router
from app.core.config import settings
from app.core.flow_logging import configure_logging
from app.db.base import Base
from app.db.session import engine

from app import models  # noqa: F401

configure_logging()
logger = logging.getLogger(__name__)


def _log_routes(app: FastAPI) -> None:
    logger.info("API documentation:")
    for route in app.routes:
        if not isinstance(route, APIRoute) or not route.path.startswith("/api"):
            continue
        for method in sorted(route.methods):
            logger.info("  - %-6s %s", method, route.path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.DB_CREATE_TABLES:
        Base.metadata.create_all(engine)
        logger.info("Tables ensured on %s", engine.url.render_as_string(hide_password=True))
    _log_routes(app)
    yield
    engine.dispose()


app = FastAPI(title="API Colombia", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =====================================================
# Error bodies are always {"error": "<message>"}
# =====================================================
BODY_NOT_OBJECT_TYPES = {"model_type", "model_attributes_type", "dict_type"}


def _validation_message(errors: list[dict]) -> str:
    for err in errors:
        loc = tuple(err.get("loc") or ())
        if loc and loc[0] == "path":
            return "El id debe ser un número entero"
        if err.get("type") == "json_invalid":
            return "El cuerpo de la petición no es un JSON válido"
        if loc == ("body",) or err.get("type") in BODY_NOT_OBJECT_TYPES:
            return "El cuerpo de la petición debe ser un objeto JSON"
    if not errors:
        return "Petición inválida"
    first = errors[0]
    field = ".".join(str(part) for part in (first.get("loc") or ())[1:])
    msg = str(first.get("msg") or "valor inválido")
    return f"{field}: {msg}" if field else msg


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    # Driver message goes back verbatim; this API is an internal tool.
    logger.exception("storage_error method=%s path=%s", request.method, request.url.path)
    message = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(status_code=500, content={"error": message})


app.include_router(departamentos_router)
app.include_router(ciudades_router)


@app.get("/")
def root():
    return {
        "message": "API Colombia funcionando correctamente",
        "endpoints": {
            "departamentos": "/api/departamentos",
            "ciudades": "/api/ciudades",
        },
    }


@app.get("/health")
def health():
    return {"status": "up"}


def run() -> None:
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
