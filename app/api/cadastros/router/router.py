# app/api/cadastros/router/router.py

from fastapi import APIRouter

from app.api.cadastros.router.router_clientes import router as router_clientes
from app.api.cadastros.router.router_funcionarios import router as router_funcionarios
from app.api.cadastros.router.router_usuarios import router as router_usuarios

api_cadastros = APIRouter(
    tags=["API - Cadastros"]
)

api_cadastros.include_router(router_clientes)
api_cadastros.include_router(router_funcionarios)
api_cadastros.include_router(router_usuarios)
