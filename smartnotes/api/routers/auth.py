"""Rutas de autenticación: registro y login."""
import logging

from fastapi import APIRouter, HTTPException, status

from smartnotes.api.schemas.auth import AuthOut, LoginPayload, RegisterPayload
from smartnotes.core.exceptions import AppError
from smartnotes.services import auth_service as service

router = APIRouter(prefix="/auth", tags=["Auth"])

_log = logging.getLogger("smartnotes.auth")


@router.post(
    "/register",
    response_model=AuthOut,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar usuario",
    description="Crea el usuario (email único) y devuelve token + datos públicos.",
)
def register(payload: RegisterPayload):
    try:
        return service.register(payload.name, payload.email, payload.password)
    except AppError:
        raise
    except Exception:
        _log.exception("Registro falló")
        raise HTTPException(status_code=500, detail="Registration failed")


@router.post(
    "/login",
    response_model=AuthOut,
    summary="Login con email y password",
    description="Mismo 401 para email desconocido y password incorrecto.",
)
def login(payload: LoginPayload):
    try:
        return service.login(payload.email, payload.password)
    except AppError:
        raise
    except Exception:
        _log.exception("Login falló")
        raise HTTPException(status_code=500, detail="Login failed")
