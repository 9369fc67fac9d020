"""
Casos de uso de la aplicacion.
"""
from .migration_use_cases import MigrationUseCases

__all__ = ["MigrationUseCases"]
