"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.
Soporta configuracion dinamica para desarrollo (ENVIRONMENT=development)
y produccion (ENVIRONMENT=production).
"""
import json
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.

    - DATABASE_URL se puede especificar completa o por componentes
    - Google Sheets se desactiva si GOOGLE_SHEETS_SPREADSHEET_ID esta vacio
    - MIGRATION_TRANSPORT: 'inprocess' (llamada directa) o 'http' (POST a la propia API)
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Back Office Sync API")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # Base de datos - Componentes separados
    DATABASE_HOST: str = Field(default="localhost")
    DATABASE_PORT: int = Field(default=5432)
    DATABASE_USER: str = Field(default="backoffice_user")
    DATABASE_PASSWORD: str = Field(default="backoffice_pass")
    DATABASE_NAME: str = Field(default="backoffice_db")

    # Base de datos - URL completa (override de componentes si se proporciona)
    DATABASE_URL: str = Field(default="")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Google Sheets
    GOOGLE_SHEETS_SPREADSHEET_ID: str = Field(default="")
    GOOGLE_SERVICE_ACCOUNT_FILE: str = Field(default="")
    # JSON completo de la cuenta de servicio (alternativa a *_FILE para contenedores)
    GOOGLE_SERVICE_ACCOUNT_JSON: str = Field(default="")
    SHEETS_TIMEOUT_SECONDS: int = Field(default=30)
    SHEETS_MAX_RETRIES: int = Field(default=6)

    # Migraciones programadas
    MIGRATION_SCHEDULER_ENABLED: bool = Field(default=True)
    MIGRATION_CRON: str = Field(default="0 * * * *")
    MIGRATION_TIMEZONE: str = Field(default="Africa/Nairobi")
    MIGRATION_ENTITY_DELAY_SECONDS: float = Field(default=1.0)
    MIGRATION_TRANSPORT: str = Field(default="inprocess")
    API_BASE_URL: str = Field(default="http://127.0.0.1:8000")
    MIGRATION_HTTP_TIMEOUT_SECONDS: float = Field(default=300.0)

    # Ventana durante la cual un intento de escritura en Sheets se considera "en vuelo"
    SYNC_IN_FLIGHT_WINDOW_SECONDS: int = Field(default=300)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    @computed_field
    @property
    def effective_database_url(self) -> str:
        """
        Retorna la URL de base de datos efectiva.
        Si DATABASE_URL esta definida, la usa directamente.
        Si no, construye la URL desde los componentes individuales.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    @computed_field
    @property
    def sheets_enabled(self) -> bool:
        """Indica si hay configuracion suficiente para hablar con Google Sheets."""
        return bool(
            self.GOOGLE_SHEETS_SPREADSHEET_ID
            and (self.GOOGLE_SERVICE_ACCOUNT_FILE or self.GOOGLE_SERVICE_ACCOUNT_JSON)
        )

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
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
