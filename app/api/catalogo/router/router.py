from fastapi import APIRouter

from app.api.catalogo.router.router_catalogo import router as router_catalogo

router = APIRouter()

router.include_router(router_catalogo)
