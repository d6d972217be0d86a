"""
Camada de Serviço dos Check-ins

Um check-in de rendição deixa também uma observação na carreira
("Cheguei ao <local>"), visível aos restantes tripulantes.
"""

from datetime import datetime, timedelta, timezone
from typing import List

from flask import current_app

from guarda_freios.core.constants import (
    CHECKINS_LIMITE,
    COLECAO_CHECKINS,
    COLECAO_OBSERVACOES,
    OBSERVACOES_LIMITE,
    TIPO_CHECKIN_PADRAO,
    TIPO_OBSERVACAO_CHECKIN,
)
from guarda_freios.core.database import get_colecao
from guarda_freios.core.logger import get_logger

logger = get_logger(__name__)


def criar_checkin(dados: dict) -> dict:
    agora = datetime.now(timezone.utc)
    checkin = get_colecao(COLECAO_CHECKINS).adicionar({
        'tripulante_id': dados['tripulante_id'],
        'servico_id': dados.get('servico_id'),
        'veiculo_id': dados.get('veiculo_id'),
        'carreira': dados.get('carreira_id'),
        'local': dados['local'],
        'latitude': dados.get('latitude'),
        'longitude': dados.get('longitude'),
        'tipo': dados.get('tipo') or TIPO_CHECKIN_PADRAO,
        'timestamp': agora,
    })

    # Sem carreira não há onde publicar a observação
    if checkin['carreira']:
        get_colecao(COLECAO_OBSERVACOES).adicionar({
            'carreira': checkin['carreira'],
            'tripulante_id': checkin['tripulante_id'],
            'veiculo_id': checkin['veiculo_id'],
            'tipo': TIPO_OBSERVACAO_CHECKIN,
            'mensagem': f"Cheguei ao {checkin['local']}",
            'latitude': checkin['latitude'],
            'longitude': checkin['longitude'],
            'timestamp': agora,
        })

    logger.info(f"Check-in {checkin['id']} de {checkin['tripulante_id']} em {checkin['local']}")
    return checkin


def _recentes(colecao: str, codigo: str, desde: datetime, limite: int) -> List[dict]:
    docs = get_colecao(colecao).consultar([('carreira', '==', codigo)])
    recentes = [d for d in docs if d.get('timestamp') and d['timestamp'] > desde]
    recentes.sort(key=lambda d: d['timestamp'], reverse=True)
    return recentes[:limite]


def checkins_da_carreira(codigo: str) -> List[dict]:
    desde = datetime.now(timezone.utc) - timedelta(hours=current_app.config['CHECKINS_JANELA_HORAS'])
    return _recentes(COLECAO_CHECKINS, codigo, desde, CHECKINS_LIMITE)


def observacoes_da_carreira(codigo: str) -> List[dict]:
    desde = datetime.now(timezone.utc) - timedelta(hours=current_app.config['OBSERVACOES_RETENCAO_HORAS'])
    return _recentes(COLECAO_OBSERVACOES, codigo, desde, OBSERVACOES_LIMITE)


def limpar_observacoes_antigas() -> int:
    """Remove observações mais antigas que OBSERVACOES_RETENCAO_HORAS."""
    limite = datetime.now(timezone.utc) - timedelta(hours=current_app.config['OBSERVACOES_RETENCAO_HORAS'])
    removidas = get_colecao(COLECAO_OBSERVACOES).excluir_onde([('timestamp', '<', limite)])
    if removidas:
        logger.info(f"{removidas} observações antigas removidas")
    return removidas
