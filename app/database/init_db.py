import logging

from sqlalchemy.exc import SQLAlchemyError

from .db_connection import Base, LocalSessionLocal, engine_local, engine_remoto

logger = logging.getLogger(__name__)


def importar_models():
    # ─── Coleções sincronizadas (remoto + espelho local) ─────────────
    from app.api.pedidos.models.model_pedido import PedidoModel, ContadorModel
    from app.api.cadastros.models.model_cliente import ClienteModel
    from app.api.cadastros.models.model_funcionario import FuncionarioModel
    from app.api.estoque.models.model_item_bloqueado import ItemBloqueadoModel
    # ─── Somente local ───────────────────────────────────────────────
    from app.api.cadastros.models.model_usuario import UsuarioModel
    from app.api.configuracoes.models.model_configuracao import ConfiguracaoModel
    logger.info("📦 Models importados com sucesso.")
    return [
        PedidoModel.__table__,
        ContadorModel.__table__,
        ClienteModel.__table__,
        FuncionarioModel.__table__,
        ItemBloqueadoModel.__table__,
    ]


def criar_tabelas_local():
    Base.metadata.create_all(bind=engine_local, checkfirst=True)
    logger.info("✅ Tabelas do banco local criadas/verificadas.")


def criar_tabelas_remoto(tabelas_sincronizadas) -> bool:
    """Banco remoto fora do ar não impede a subida: o caixa segue no local."""
    if engine_remoto is None:
        logger.info("ℹ️ Banco remoto não configurado, pulando criação de tabelas remotas.")
        return False
    try:
        Base.metadata.create_all(bind=engine_remoto, tables=tabelas_sincronizadas, checkfirst=True)
    except SQLAlchemyError as e:
        logger.warning(f"⚠️ Banco remoto indisponível na inicialização, seguindo com o local: {e}")
        return False
    logger.info("✅ Tabelas do banco remoto criadas/verificadas.")
    return True


def criar_usuario_admin_padrao():
    from app.api.cadastros.services.service_usuario import UsuarioService

    db = LocalSessionLocal()
    try:
        UsuarioService(db).garantir_admin_padrao()
    finally:
        db.close()


def restaurar_modo_offline():
    from app.api.configuracoes.services.service_configuracao import ConfiguracaoService

    db = LocalSessionLocal()
    try:
        ConfiguracaoService(db).restaurar_modo_offline()
    finally:
        db.close()


def inicializar_banco():
    logger.info("🚀 Iniciando processo de inicialização do banco de dados...")

    logger.info("📦 Passo 1/4: Importando models...")
    tabelas_sincronizadas = importar_models()

    logger.info("📋 Passo 2/4: Criando/verificando tabelas locais e remotas...")
    criar_tabelas_local()
    criar_tabelas_remoto(tabelas_sincronizadas)

    logger.info("🧑‍💼 Passo 3/4: Criando/verificando administrador padrão...")
    criar_usuario_admin_padrao()

    logger.info("📴 Passo 4/4: Restaurando modo offline salvo...")
    restaurar_modo_offline()

    logger.info("✅ Banco inicializado com sucesso.")
