"""Entrada principal de la app FastAPI (configura middlewares, excepciones y routers)."""
import logging

import uvicorn
from fastapi import FastAPI

from smartnotes.api.router import api_router
from smartnotes.core.config import settings
from smartnotes.core.exceptions import register_exception_handlers
from smartnotes.core.logging import setup_logging
from smartnotes.core.middleware import add_middlewares
from smartnotes.infrastructure.db.bootstrap import ensure_collections
from smartnotes.infrastructure.db.mongo import close_mongo, db_ready, init_mongo

_log = logging.getLogger("smartnotes.startup")

setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name)

add_middlewares(app)
register_exception_handlers(app)


# Startup
@app.on_event("startup")
def on_startup():
    if settings.jwt_secret_is_default:
        _log.warning("JWT_SECRET no configurado; usando secreto de desarrollo")
    init_mongo()
    # Garantiza colecciones/índices si hay conexión
    if db_ready():
        ensure_collections()
    else:
        _log.warning("Mongo no listo; omitiendo ensure_collections()")


@app.on_event("shutdown")
def on_shutdown():
    close_mongo()


# Monta routers bajo el prefijo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)


def run() -> None:
    """Punto de entrada `smartnotes-server`."""
    uvicorn.run("smartnotes.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())
