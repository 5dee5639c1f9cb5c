"""
Router para monitoramento: métricas, logs e estado da sincronização.
"""
import re
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from app.api.cadastros.services.dependencies import (
    get_cliente_repository,
    get_funcionario_repository,
    get_pedido_repository,
)
from app.api.estoque.services.dependencies import get_estoque_repository
from app.config.settings import LOG_DIR
from app.core.admin_dependencies import get_current_user
from app.database.db_connection import backend_remoto
from app.database.sync.modo_offline import modo_offline
from app.utils.logger import logger
from app.utils.prometheus_metrics import get_metrics, CONTENT_TYPE_LATEST

router = APIRouter(
    prefix="/api/monitoring",
    tags=["Monitoring - Monitoramento"],
    dependencies=[Depends(get_current_user)],
)

# Router público para métricas (sem autenticação)
router_public = APIRouter(
    prefix="/api/monitoring",
    tags=["Monitoring - Monitoramento"]
)

LOG_FILE = LOG_DIR / "app.log"
LOG_LINE = re.compile(r'(.*?) \| (.*?) \| (.*?) \| (.*)')


@router_public.get("/metrics")
async def metrics():
    """
    Endpoint de métricas Prometheus (público, sem autenticação).
    Acesse em: /api/monitoring/metrics
    """
    return StreamingResponse(
        iter([get_metrics()]),
        media_type=CONTENT_TYPE_LATEST
    )


@router.get("/sync")
def status_sincronizacao():
    """Modo atual e quantas assinaturas cada coleção mantém abertas."""
    colecoes = [
        get_pedido_repository(),
        get_cliente_repository(),
        get_funcionario_repository(),
        get_estoque_repository(),
    ]
    return {
        "modo_offline": modo_offline.offline,
        "remoto_configurado": backend_remoto is not None,
        "colecoes": {c.nome: c.total_assinaturas for c in colecoes},
    }


@router.get("/logs/json")
def get_logs_json(
    lines: int = Query(100, ge=1, le=1000),
    level: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
):
    """
    Retorna as últimas linhas do log em formato JSON.
    """
    if not LOG_FILE.exists():
        raise HTTPException(status_code=404, detail="Arquivo de log não encontrado")

    try:
        with open(LOG_FILE, 'r', encoding='utf-8') as f:
            all_lines = f.readlines()
    except OSError as e:
        logger.error(f"Erro ao ler logs JSON: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Erro ao ler logs: {str(e)}"
        )

    log_lines = all_lines[-lines:]
    if level:
        log_lines = [line for line in log_lines if f"| {level.upper()} |" in line]
    if search:
        log_lines = [line for line in log_lines if search.lower() in line.lower()]

    parsed_logs = []
    for line in log_lines:
        line = line.strip()
        if not line:
            continue
        match = LOG_LINE.match(line)
        if match:
            timestamp, log_level, logger_name, message = match.groups()
            parsed_logs.append({
                "timestamp": timestamp,
                "level": log_level,
                "logger": logger_name,
                "message": message
            })
        else:
            parsed_logs.append({"raw": line})

    return {
        "total": len(parsed_logs),
        "lines": lines,
        "filters": {
            "level": level,
            "search": search
        },
        "logs": parsed_logs
    }
