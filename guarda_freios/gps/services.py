"""
Camada de Serviço do GPS

Cada tripulante tem no máximo uma posição ativa: uma nova posição desativa
as anteriores antes de ser inserida.
"""

from datetime import datetime, timedelta, timezone
from typing import List

from flask import current_app

from guarda_freios.core.constants import COLECAO_GPS
from guarda_freios.core.database import get_colecao
from guarda_freios.core.logger import get_logger

logger = get_logger(__name__)


def desativar_posicoes(tripulante_id: str) -> int:
    return get_colecao(COLECAO_GPS).atualizar_onde(
        [('tripulante_id', '==', tripulante_id), ('ativo', '==', True)],
        {'ativo': False},
    )


def atualizar_posicao(dados: dict) -> dict:
    """
    Desativa as posições antigas do tripulante e insere a nova como ativa.
    """
    desativar_posicoes(dados['tripulante_id'])

    posicao = {
        'tripulante_id': dados['tripulante_id'],
        'veiculo_id': dados['veiculo_id'],
        'carreira': dados['carreira_id'],
        'latitude': dados['latitude'],
        'longitude': dados['longitude'],
        'precisao': dados.get('precisao'),
        'velocidade': dados.get('velocidade'),
        'ativo': True,
        'timestamp': datetime.now(timezone.utc),
    }
    return get_colecao(COLECAO_GPS).adicionar(posicao)


def posicoes_da_carreira(codigo: str) -> List[dict]:
    """Posições ativas da carreira recebidas nos últimos GPS_JANELA_MINUTOS."""
    limite = datetime.now(timezone.utc) - timedelta(minutes=current_app.config['GPS_JANELA_MINUTOS'])
    posicoes = get_colecao(COLECAO_GPS).consultar(
        [('carreira', '==', codigo), ('ativo', '==', True)]
    )
    recentes = [p for p in posicoes if p.get('timestamp') and p['timestamp'] > limite]
    recentes.sort(key=lambda p: p['timestamp'], reverse=True)
    return recentes


def parar_partilha(tripulante_id: str) -> None:
    total = desativar_posicoes(tripulante_id)
    logger.info(f"GPS desativado para {tripulante_id} ({total} posições)")
