"""
Endpoint para sincronizar usuarios AITable -> Firebase.
Acepta cualquier metodo HTTP: cada llamada ejecuta una pasada completa.
"""
import asyncio

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from loguru import logger

from app.api.v1.dependencies.use_case_deps import get_user_sync_use_case
from app.application.dto.sync_dto import SyncResponseDTO
from app.application.use_cases.user_sync_use_cases import UserSyncUseCase
from app.shared.exceptions.base import AppException


router = APIRouter(prefix="/sync", tags=["Sync"])

SYNC_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route(
    "",
    methods=SYNC_METHODS,
    response_model=SyncResponseDTO,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar usuarios de AITable con Firebase"
)
async def sync_users(
    use_case: UserSyncUseCase = Depends(get_user_sync_use_case)
):
    """
    Ejecuta una pasada del sync de usuarios.

    - Sin registros: {"message": "No records found in AITable."}
    - Con registros: {"message": ...} y, si hubo errores por registro, "details" y "errors"
    - Error fatal (AITable inaccesible, credenciales): 500 {"error": ...}
    """
    logger.info("Iniciando sync de usuarios AITable -> Firebase desde API")
    try:
        # Ejecutar sync en thread separado para no bloquear el event loop
        summary = await asyncio.to_thread(use_case.run)
    except AppException as e:
        logger.error(f"Error en sync de usuarios [{e.error_code}]: {e.message}")
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_response()
        )
    except Exception as e:
        logger.exception("Error inesperado en sync de usuarios")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)}
        )

    response = SyncResponseDTO.from_summary(summary)
    logger.info(f"Sync de usuarios completado: {response.message}")
    return JSONResponse(status_code=status.HTTP_200_OK, content=response.to_body())
