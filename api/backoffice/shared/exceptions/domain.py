"""
Excepciones relacionadas con la logica de dominio de migraciones.
"""
from typing import List, Optional

from backoffice.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepcion base para errores de dominio."""

    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class ValidationException(DomainException):
    """Excepcion para errores de validacion (ej. parametro obligatorio ausente)."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else None
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details
        )


class MigrationNotFoundException(DomainException):
    """Excepcion cuando se pide una migracion que no esta registrada."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        super().__init__(
            message=f'Migration "{name}" not found',
            error_code="MIGRATION_NOT_FOUND",
            details={"name": name, "available_migrations": available or []}
        )
        self.status_code = 404


class MigrationInProgressException(DomainException):
    """Excepcion cuando ya hay una corrida de migraciones en curso."""

    def __init__(self, started_at: Optional[str] = None):
        super().__init__(
            message="Ya hay una corrida de migraciones en curso",
            error_code="MIGRATION_IN_PROGRESS",
            details={"started_at": started_at} if started_at else None
        )
        self.status_code = 409


class RecordNotFoundException(DomainException):
    """Excepcion cuando no existe el registro pedido en la base de datos."""

    def __init__(self, entity_name: str, record_id: int):
        super().__init__(
            message=f"{entity_name} con ID {record_id} no encontrado",
            error_code="RECORD_NOT_FOUND",
            details={"entity": entity_name, "id": record_id}
        )
        self.status_code = 404
