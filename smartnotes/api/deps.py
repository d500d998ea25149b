"""
Dependencias reutilizables para routers (FastAPI Depends).

- Autenticación: extrae y valida el bearer token, devuelve el user_id.
- Sin consulta a la base: el token es autosuficiente (sin revocación en servidor).
"""
from typing import Optional

from fastapi import Header

from smartnotes.core.exceptions import AuthError
from smartnotes.services.token_service import verify_token


def get_current_user_id(authorization: Optional[str] = Header(default=None)) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Missing token")
    token = authorization[len("Bearer "):].strip()
    return verify_token(token)
