from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from app.core.exceptions import PdvError
from app.core.exception_handlers import (
    validation_exception_handler,
    http_exception_handler,
    pdv_exception_handler,
    general_exception_handler,
)
from app.utils.logger import logger
from app.config.settings import CORS_ORIGINS, CORS_ALLOW_ALL, BASE_URL, ENABLE_DOCS

from app.api.auth import auth_controller
from app.api.cadastros.router.router import api_cadastros
from app.api.pedidos.router.router import api_pedidos
from app.api.catalogo.router.router import router as catalogo_router
from app.api.estoque.router.router_estoque import router as estoque_router
from app.api.configuracoes.router.router_configuracoes import router as configuracoes_router
from app.api.relatorios.router.router import router as relatorios_router
from app.api.sync.websocket_router import router as sync_router
from app.api.monitoring.router import router as monitoring_router, router_public as monitoring_router_public


# ──────────────────────────
# Instância FastAPI
# ──────────────────────────
app = FastAPI(
    title="Pizzaria PDV API",
    version="1.0.0",
    description="Caixa, quadro da cozinha, cadastros e relatórios da pizzaria",
    docs_url=("/swagger" if ENABLE_DOCS else None),
    redoc_url=("/redoc" if ENABLE_DOCS else None),
    openapi_url=("/openapi.json" if ENABLE_DOCS else None),
    servers=[{"url": BASE_URL, "description": "Base URL do ambiente"}] if BASE_URL else None,
    redirect_slashes=False,
)

# ───────────────────────────
# Exception Handlers Globais
# ───────────────────────────
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(PdvError, pdv_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# ───────────────────────────
# Middlewares
# ───────────────────────────
# Executados na ordem reversa da adição (último adicionado = primeiro executado)
from app.utils.prometheus_metrics import PrometheusMiddleware
app.add_middleware(PrometheusMiddleware)

# - CORS_ALLOW_ALL=true => allow_origins=["*"], allow_credentials=False
# - Caso contrário => CORS_ORIGINS (vazio cai para ["*"]), credenciais só com origens explícitas
if CORS_ALLOW_ALL:
    allowed_origins = ["*"]
    allow_credentials = False
else:
    allowed_origins = CORS_ORIGINS or ["*"]
    allow_credentials = bool(CORS_ORIGINS)
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ───────────────────────────
# Startup / Shutdown
# ───────────────────────────
@app.on_event("startup")
async def startup():
    from app.database.init_db import inicializar_banco

    logger.info("Iniciando API e banco de dados...")
    inicializar_banco()
    logger.info("API iniciada com sucesso.")


@app.on_event("shutdown")
async def shutdown():
    logger.info("API encerrada.")


# ───────────────────────────
# Rotas
# ───────────────────────────
@app.get("/")
async def root():
    return {"status": "ok", "message": "API is running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}


app.include_router(monitoring_router_public)  # Métricas públicas (sem auth)
app.include_router(monitoring_router)

app.include_router(auth_controller.router)
app.include_router(api_cadastros)
app.include_router(api_pedidos)
app.include_router(catalogo_router)
app.include_router(estoque_router)
app.include_router(configuracoes_router)
app.include_router(relatorios_router)
app.include_router(sync_router)


# ───────────────────────────
# OpenAPI: Segurança Bearer/JWT no Swagger
# ───────────────────────────
def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
        servers=app.servers,
    )

    components = openapi_schema.get("components", {})
    security_schemes = components.get("securitySchemes", {})
    security_schemes.update({
        "bearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    })
    components["securitySchemes"] = security_schemes
    openapi_schema["components"] = components
    openapi_schema["security"] = [{"bearerAuth": []}]

    public_paths = {"/", "/health", "/api/monitoring/metrics", "/api/auth/token"}
    for path, methods in openapi_schema.get("paths", {}).items():
        if path in public_paths:
            for method_obj in methods.values():
                method_obj["security"] = []

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi
