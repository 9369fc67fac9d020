"""
Sincronizacion bidireccional: Google Sheets <-> PostgreSQL.

Un unico motor (EntitySyncService) parametrizado por descriptores
(EntitySyncConfig) registrados en un orden fijo (registry.REGISTRY).

Objetivos de diseno:
- Idempotencia: importar dos veces no duplica registros (sheet_id unico).
- Tolerancia a fallos: un registro con error no aborta la pasada.
- Mapeo explicito columna de hoja <-> columna Postgres, con coerciones en codigo.
"""
