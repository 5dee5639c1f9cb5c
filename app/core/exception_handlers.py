# app/core/exception_handlers.py
from fastapi import Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import PdvError
from app.utils.logger import logger


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    erros = []
    for erro in exc.errors():
        campo = ".".join(str(p) for p in erro.get("loc", []) if p != "body")
        erros.append(f"{campo}: {erro.get('msg')}" if campo else erro.get("msg"))
    logger.warning(f"[API] Requisição inválida em {request.url.path}: {erros}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Dados inválidos", "erros": erros},
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    if exc.status_code >= 500:
        logger.error(f"[API] {request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def pdv_exception_handler(request: Request, exc: PdvError):
    logger.info(f"[API] {request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    content = {"detail": exc.detail}
    erros = getattr(exc, "erros", None)
    if erros:
        content["erros"] = erros
    return JSONResponse(status_code=exc.status_code, content=content)


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"[API] Erro não tratado em {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Erro interno do servidor"},
    )
