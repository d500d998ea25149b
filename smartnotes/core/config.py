"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Auth/JWT, HuggingFace.
- Acepta los nombres de variables heredados (PORT, MONGODB_URI, JWT_SECRET,
  CORS_ORIGIN, HUGGINGFACE_*) vía `AliasChoices`.
"""
from pathlib import Path
from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"

LOCALHOST_ORIGIN_REGEX = r"http://localhost:\d+"


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: los valores pueden sobreescribirse vía variables de entorno (.env).
    """
    # App
    app_name: str = "Smart Notes API"
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"

    # CORS: lista explícita separada por comas + cualquier http://localhost:<puerto>
    cors_origin: str = Field(
        "http://localhost:5173,http://localhost:5175",
        validation_alias=AliasChoices("CORS_ORIGIN", "CORS_ORIGINS"),
    )
    cors_allow_localhost: bool = True

    # Mongo
    mongo_uri: str = Field(
        "mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGODB_URI", "MONGO_URI"),
    )
    mongo_db: str = "smart_notes"
    mongo_tls: bool = False
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_server_selection_timeout_ms: int = 15000

    # Auth / JWT
    jwt_secret: str = "dev"
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 7

    # HuggingFace Inference (resúmenes)
    hf_model: str = Field(
        "facebook/bart-large-cnn",
        validation_alias=AliasChoices("HUGGINGFACE_SUMMARIZATION_MODEL", "HF_MODEL"),
    )
    hf_api_key: str | None = Field(
        None,
        validation_alias=AliasChoices("HUGGINGFACE_API_KEY", "HF_API_KEY"),
    )
    hf_api_base: str = Field(
        "https://api-inference.huggingface.co",
        validation_alias=AliasChoices("HUGGINGFACE_API_BASE", "HF_API_BASE"),
    )
    hf_timeout_seconds: int = Field(
        30,
        validation_alias=AliasChoices("HUGGINGFACE_TIMEOUT_SECONDS", "HF_TIMEOUT_SECONDS"),
    )

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in (self.cors_origin or "").split(",") if o.strip()]

    @property
    def hf_configured(self) -> bool:
        return bool(self.hf_api_key)

    @property
    def jwt_secret_is_default(self) -> bool:
        return self.jwt_secret == "dev"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",  # no fallar si hay variables no usadas
    )


settings = Settings()
