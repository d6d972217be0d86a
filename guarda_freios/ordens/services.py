"""
Camada de Serviço das Ordens de Serviço

As ordens nunca são apagadas: ao expirar (ou por decisão de um gestor)
ficam inativas, com a hora de remoção registada.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from guarda_freios.core.constants import COLECAO_ORDENS
from guarda_freios.core.database import get_colecao
from guarda_freios.core.errors import NotFoundError
from guarda_freios.core.logger import get_logger

logger = get_logger(__name__)


def criar_ordem(dados: dict, autor_id: str) -> dict:
    agora = datetime.now(timezone.utc)
    ordem = get_colecao(COLECAO_ORDENS).adicionar({
        'titulo': dados['titulo'],
        'mensagem': dados['mensagem'],
        'carreira': dados.get('carreira') or None,
        'autor_id': autor_id,
        'criado_em': agora,
        'expira_em': agora + timedelta(minutes=dados['validade_minutos']),
        'ativo': True,
        'removido_em': None,
    })
    logger.info(f"Ordem de serviço {ordem['id']} publicada por {autor_id} (expira {ordem['expira_em']})")
    return ordem


def listar_ativas(carreira: Optional[str] = None) -> List[dict]:
    """
    Ordens ativas e ainda dentro da validade. Com carreira, inclui as
    ordens dessa carreira e as gerais (sem carreira).
    """
    agora = datetime.now(timezone.utc)
    ordens = get_colecao(COLECAO_ORDENS).consultar([('ativo', '==', True)])
    ativas = [o for o in ordens if o.get('expira_em') and o['expira_em'] > agora]
    if carreira:
        ativas = [o for o in ativas if o.get('carreira') in (None, carreira)]
    ativas.sort(key=lambda o: o['criado_em'], reverse=True)
    return ativas


def remover_ordem(ordem_id: str) -> None:
    colecao = get_colecao(COLECAO_ORDENS)
    ordem = colecao.obter(ordem_id)
    if ordem is None or not ordem.get('ativo'):
        raise NotFoundError('Ordem de serviço não encontrada')

    colecao.atualizar(ordem_id, {'ativo': False, 'removido_em': datetime.now(timezone.utc)})
    logger.info(f"Ordem de serviço {ordem_id} removida")


def expirar_ordens() -> int:
    """Desativa todas as ordens cuja validade já passou."""
    agora = datetime.now(timezone.utc)
    total = get_colecao(COLECAO_ORDENS).atualizar_onde(
        [('ativo', '==', True), ('expira_em', '<=', agora)],
        {'ativo': False, 'removido_em': agora},
    )
    if total:
        logger.info(f"{total} ordens de serviço expiradas desativadas")
    return total
