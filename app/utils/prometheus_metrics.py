"""
Módulo de métricas Prometheus para monitoramento da aplicação.
"""
import re
from time import time
from typing import Callable

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Métricas de requisições HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total de requisições HTTP',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'Duração das requisições HTTP em segundos',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0]
)

http_errors_total = Counter(
    'http_errors_total',
    'Total de erros HTTP',
    ['method', 'endpoint', 'status_code']
)

# Métricas da camada de sincronização
sync_fallback_total = Counter(
    'sync_fallback_total',
    'Operações que falharam no banco remoto e foram gravadas/lidas no banco local',
    ['colecao', 'operacao']
)

sync_modo_offline = Gauge(
    'sync_modo_offline',
    '1 quando o modo offline forçado está ativo'
)

pedidos_criados_total = Counter(
    'pedidos_criados_total',
    'Pedidos criados por backend de armazenamento',
    ['origem']
)

_UUID_HEX = re.compile(r'/[0-9a-f]{32}')
_UUID = re.compile(r'/[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}')
_NUMERO = re.compile(r'/\d+')


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware para coletar métricas Prometheus das requisições HTTP."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Ignora o endpoint de métricas para evitar loop
        if request.url.path.endswith("/metrics"):
            return await call_next(request)

        method = request.method
        endpoint = self._normalize_endpoint(request.url.path)
        start_time = time()

        try:
            response = await call_next(request)
        except Exception:
            http_requests_total.labels(method=method, endpoint=endpoint, status_code=500).inc()
            http_errors_total.labels(method=method, endpoint=endpoint, status_code=500).inc()
            raise

        status_code = response.status_code
        http_requests_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
        http_request_duration_seconds.labels(method=method, endpoint=endpoint).observe(time() - start_time)
        if status_code >= 400:
            http_errors_total.labels(method=method, endpoint=endpoint, status_code=status_code).inc()
        return response

    @staticmethod
    def _normalize_endpoint(endpoint: str) -> str:
        """
        Normaliza endpoints removendo IDs para evitar alta cardinalidade.
        Ex: /api/pedidos/admin/1001 -> /api/pedidos/admin/{id}
        """
        endpoint = _UUID.sub('/{uuid}', endpoint)
        endpoint = _UUID_HEX.sub('/{uuid}', endpoint)
        return _NUMERO.sub('/{id}', endpoint)


def get_metrics():
    """Retorna as métricas no formato Prometheus."""
    return generate_latest()


__all__ = [
    "CONTENT_TYPE_LATEST",
    "PrometheusMiddleware",
    "get_metrics",
    "pedidos_criados_total",
    "sync_fallback_total",
    "sync_modo_offline",
]
