"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales del servicio
de sincronizacion AITable -> Firebase.
"""
import json
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    Variables obligatorias para ejecutar el sync (se validan al construir el job,
    no al arrancar, para que /health responda aunque falte configuracion):
    - AITABLE_API_URL: URL de lectura de la tabla (GET)
    - PATCH_URL: URL de escritura de registros (PATCH)
    - AITABLE_TOKEN: Bearer token de AITable
    - FIREBASE_SERVICE_ACCOUNT_BASE64: JSON del service account en base64
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="AITable User Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    # AITable
    AITABLE_API_URL: str = Field(default="")
    PATCH_URL: str = Field(default="")
    AITABLE_TOKEN: str = Field(default="")
    AITABLE_FIELD_KEY: str = Field(default="name")
    AITABLE_TIMEOUT_S: int = Field(default=30)

    # Firebase (Auth + Firestore)
    FIREBASE_SERVICE_ACCOUNT_BASE64: str = Field(default="")
    FIRESTORE_USER_COLLECTION: str = Field(default="user")

    # Contraseñas generadas para las identidades nuevas
    PASSWORD_LENGTH: int = Field(default=20)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    @computed_field
    @property
    def missing_sync_settings(self) -> List[str]:
        """Nombres de las variables obligatorias del sync que estan vacias."""
        required = {
            "AITABLE_API_URL": self.AITABLE_API_URL,
            "PATCH_URL": self.PATCH_URL,
            "AITABLE_TOKEN": self.AITABLE_TOKEN,
            "FIREBASE_SERVICE_ACCOUNT_BASE64": self.FIREBASE_SERVICE_ACCOUNT_BASE64,
        }
        return [name for name, value in required.items() if not value]

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
