"""
Esquemas Pydantic para operaciones de autenticación.

Los campos son opcionales a nivel de esquema: un campo faltante es un 400
("Missing fields") que decide el servicio, no un error de validación de FastAPI.
"""
from typing import Optional

from pydantic import BaseModel


class RegisterPayload(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginPayload(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# === Response models ===

class PublicUser(BaseModel):
    id: str
    name: str
    email: str


class AuthOut(BaseModel):
    token: str
    user: PublicUser
