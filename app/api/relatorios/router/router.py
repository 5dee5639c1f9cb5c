# app/api/relatorios/router/router.py
from fastapi import APIRouter

from app.api.relatorios.router.router_relatorios import router as router_relatorios

# Router principal que agrupa todos os routers de relatórios
router = APIRouter(
    tags=["API - Relatórios"]
)

router.include_router(router_relatorios)
