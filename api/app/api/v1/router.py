"""
Router principal de la API.
Agrupa todos los endpoints del servicio.
"""
from fastapi import APIRouter

from app.api.v1.endpoints import sync


# Router principal: /sync se expone en la raiz para mantener la URL publica
api_router = APIRouter()

# Incluir routers de endpoints especificos
api_router.include_router(sync.router)
