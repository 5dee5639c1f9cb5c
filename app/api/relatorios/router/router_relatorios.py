from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from app.api.cadastros.repositories.repo_cliente import ClienteRepository
from app.api.cadastros.services.dependencies import (
    get_cliente_repository,
    get_funcionario_service,
    get_pedido_repository,
)
from app.api.cadastros.services.service_funcionario import FuncionarioService
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.relatorios.schemas.schema_relatorios import (
    ComparacaoIntervalosResponse,
    ComparativosResponse,
    FechamentoDiarioResponse,
    FinanceiroResponse,
    ProdutoRanking,
)
from app.api.relatorios.services import service_relatorios as relatorios
from app.api.relatorios.services.service_exportacao import exportar_clientes_csv, exportar_pedidos_csv
from app.core.admin_dependencies import get_current_user
from app.utils.database_utils import hoje
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/relatorios",
    tags=["Relatórios - CRM"],
    dependencies=[Depends(get_current_user)],
)

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


@router.get("/comparativos", response_model=ComparativosResponse)
def comparativos(
    data: Optional[date] = Query(None, description="Dia de referência (YYYY-MM-DD); padrão hoje"),
    pedidos: PedidoRepository = Depends(get_pedido_repository),
):
    return relatorios.comparativos(pedidos.listar(), data or hoje())


@router.get("/fechamento", response_model=FechamentoDiarioResponse)
def fechamento_diario(
    data: Optional[date] = Query(None, description="Dia do fechamento (YYYY-MM-DD); padrão hoje"),
    pedidos: PedidoRepository = Depends(get_pedido_repository),
    equipe: FuncionarioService = Depends(get_funcionario_service),
):
    dia = data or hoje()
    logger.info(f"[Relatórios] Fechamento do dia {dia}")
    return relatorios.fechamento_diario(pedidos.listar(), dia, equipe.list(), equipe.config.escala())


@router.get("/financeiro", response_model=FinanceiroResponse)
def financeiro(
    inicio: date = Query(..., description="Início do período (YYYY-MM-DD)"),
    fim: date = Query(..., description="Fim do período (YYYY-MM-DD)"),
    pedidos: PedidoRepository = Depends(get_pedido_repository),
):
    return relatorios.financeiro(pedidos.listar(), inicio, fim)


@router.get("/comparar-periodos", response_model=ComparacaoIntervalosResponse)
def comparar_periodos(
    inicio_a: date = Query(...),
    fim_a: date = Query(...),
    inicio_b: date = Query(...),
    fim_b: date = Query(...),
    pedidos: PedidoRepository = Depends(get_pedido_repository),
    equipe: FuncionarioService = Depends(get_funcionario_service),
):
    return relatorios.comparar_intervalos(
        pedidos.listar(),
        (inicio_a, fim_a),
        (inicio_b, fim_b),
        equipe.list(),
        equipe.config.escala(),
    )


@router.get("/top-produtos", response_model=List[ProdutoRanking])
def top_produtos(
    limite: int = Query(10, ge=1, le=50),
    pedidos: PedidoRepository = Depends(get_pedido_repository),
):
    return relatorios.top_produtos(pedidos.listar(), limite)


@router.get("/exportar/pedidos.csv")
def exportar_pedidos(pedidos: PedidoRepository = Depends(get_pedido_repository)):
    conteudo = exportar_pedidos_csv(pedidos.listar())
    return Response(
        content=conteudo.encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="pedidos.csv"'},
    )


@router.get("/exportar/clientes.csv")
def exportar_clientes(clientes: ClienteRepository = Depends(get_cliente_repository)):
    conteudo = exportar_clientes_csv(clientes.listar())
    return Response(
        content=conteudo.encode("utf-8"),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="clientes.csv"'},
    )
