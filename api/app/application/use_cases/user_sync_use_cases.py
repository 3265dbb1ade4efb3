"""
Caso de uso: sincronizar usuarios AITable -> Firebase Auth + Firestore.

Por cada registro de AITable, en orden:
1. Si ya tiene uid, se omite (ya sincronizado).
2. Si le falta email/firstname/lastname/displayname, se omite con warning.
3. Se busca la identidad por email; si no existe se crea con contraseña aleatoria.
4. Se hace upsert (merge) del perfil en Firestore con id = uid.
5. Se escribe el uid de vuelta en AITable (PATCH).

Los errores de un registro se registran en el resumen y la corrida sigue con
el siguiente. Solo un fallo al leer la tabla aborta la corrida.

No hay rollback entre sistemas: si el PATCH falla, la identidad y el perfil
quedan creados y el registro se vuelve a procesar en la próxima corrida
(la búsqueda por email evita duplicar la identidad).
"""
from __future__ import annotations

from typing import Callable, Optional

from loguru import logger

from app.application.interfaces.user_sync_ports import (
    IdentityNotFoundError,
    IdentityProvider,
    IdentityProviderError,
    InvalidEmailError,
    ProfileStore,
    TableSource,
)
from app.core.security import SecurityService
from app.domain.entities.user_sync import (
    IdentityRecord,
    ProfileDocument,
    SourceRow,
    SyncSummary,
)
from app.shared.exceptions.sync import (
    IdentityInvalidInputException,
    IdentityResolutionException,
    RowSyncException,
    SourceUnreachableException,
    WriteBackException,
)


class UserSyncUseCase:
    """
    Job de sincronización de una sola pasada.

    Es bloqueante (requests + firebase_admin): desde FastAPI se ejecuta con
    asyncio.to_thread.
    """

    def __init__(
        self,
        table_source: TableSource,
        identity_provider: IdentityProvider,
        profile_store: ProfileStore,
        password_factory: Optional[Callable[[], str]] = None,
    ):
        self.table_source = table_source
        self.identity_provider = identity_provider
        self.profile_store = profile_store
        self.password_factory = password_factory or SecurityService.generate_password

    def run(self) -> SyncSummary:
        """
        Ejecuta una pasada completa sobre todos los registros de la tabla.

        Returns:
            SyncSummary con conteos y errores por registro

        Raises:
            SourceUnreachableException: si no se pudo leer AITable
        """
        try:
            rows = self.table_source.fetch_records()
        except Exception as e:
            logger.error(f"No se pudo leer AITable: {e}")
            raise SourceUnreachableException(f"Failed to fetch records from AITable: {e}") from e

        summary = SyncSummary(total=len(rows))
        if not rows:
            logger.info("AITable no devolvió registros")
            return summary

        logger.info(f"Iniciando sync de {len(rows)} registro(s) AITable -> Firebase")

        for row in rows:
            if row.is_synced():
                logger.debug(f"Registro {row.record_id} ya sincronizado (uid={row.uid}), omitiendo")
                summary.mark_skipped()
                continue

            missing = row.missing_fields()
            if missing:
                warning = f"Skipping incomplete record {row.record_id}: missing {', '.join(missing)}"
                logger.warning(f"Omitiendo registro incompleto {row.record_id}: faltan {', '.join(missing)}")
                summary.mark_skipped(warning)
                continue

            try:
                self._sync_row(row)
            except RowSyncException as e:
                logger.error(e.message)
                summary.mark_failed(e.message)
            except Exception as e:
                message = f"Unexpected error for recordId {row.record_id}: {e}"
                logger.exception(f"Error inesperado en registro {row.record_id}")
                summary.mark_failed(message)
            else:
                summary.mark_synced()

        logger.info(
            f"Sync completado. synced={summary.synced}, skipped={summary.skipped}, "
            f"total={summary.total}, errores={len(summary.errors)}"
        )
        return summary

    def _sync_row(self, row: SourceRow) -> IdentityRecord:
        identity = self._resolve_identity(row)

        profile = ProfileDocument.from_row(row, identity)
        try:
            self.profile_store.upsert(profile)
        except Exception as e:
            raise WriteBackException(row.record_id, "profile", str(e), uid=identity.uid) from e
        logger.info(f"Perfil guardado en Firestore para uid {identity.uid}")

        try:
            self.table_source.patch_record(row.record_id, row.with_uid(identity.uid))
        except Exception as e:
            raise WriteBackException(row.record_id, "aitable", str(e), uid=identity.uid) from e
        logger.info(f"AITable actualizado para recordId {row.record_id}")

        return identity

    def _resolve_identity(self, row: SourceRow) -> IdentityRecord:
        """Busca por email antes de crear para no duplicar identidades entre corridas."""
        try:
            try:
                identity = self.identity_provider.get_by_email(row.email)
                logger.info(f"Usuario existente {identity.uid} reutilizado para {row.email}")
                return identity
            except IdentityNotFoundError:
                pass

            identity = self.identity_provider.create(
                email=row.email,
                password=self.password_factory(),
                display_name=row.display_name,
            )
            logger.info(f"Usuario Firebase creado: {identity.uid} para {row.email}")
            return identity
        except InvalidEmailError as e:
            raise IdentityInvalidInputException(row.record_id, row.email) from e
        except IdentityProviderError as e:
            raise IdentityResolutionException(row.record_id, str(e)) from e
