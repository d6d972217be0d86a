"""
Camada de Serviço das Avarias
"""

from datetime import datetime, timezone
from typing import List, Optional

from guarda_freios.core.constants import (
    COLECAO_AVARIAS,
    ESTADO_AVARIA_ABERTA,
    ESTADO_AVARIA_RESOLVIDA,
)
from guarda_freios.core.database import get_colecao
from guarda_freios.core.errors import ConflictError, NotFoundError, ValidationError
from guarda_freios.core.logger import get_logger

logger = get_logger(__name__)

ESTADOS = (ESTADO_AVARIA_ABERTA, ESTADO_AVARIA_RESOLVIDA)


def reportar_avaria(dados: dict) -> dict:
    avaria = get_colecao(COLECAO_AVARIAS).adicionar({
        'tripulante_id': dados['tripulante_id'],
        'numero_chapa': dados['numero_chapa'],
        'veiculo_id': dados.get('veiculo_id') or None,
        'descricao': dados['descricao'],
        'gravidade': dados['gravidade'],
        'estado': ESTADO_AVARIA_ABERTA,
        'criado_em': datetime.now(timezone.utc),
        'resolvido_em': None,
        'resolvido_por': None,
    })
    logger.info(f"Avaria {avaria['id']} reportada no veículo {avaria['numero_chapa']} ({avaria['gravidade']})")
    return avaria


def listar_avarias(estado: Optional[str] = None) -> List[dict]:
    """Avarias mais recentes primeiro, opcionalmente filtradas por estado."""
    filtros = []
    if estado:
        if estado not in ESTADOS:
            raise ValidationError(f"estado deve ser um de: {', '.join(ESTADOS)}")
        filtros.append(('estado', '==', estado))

    avarias = get_colecao(COLECAO_AVARIAS).consultar(filtros)
    avarias.sort(key=lambda a: a['criado_em'], reverse=True)
    return avarias


def resolver_avaria(avaria_id: str, gestor_id: str) -> dict:
    colecao = get_colecao(COLECAO_AVARIAS)
    avaria = colecao.obter(avaria_id)
    if avaria is None:
        raise NotFoundError('Avaria não encontrada')
    if avaria.get('estado') == ESTADO_AVARIA_RESOLVIDA:
        raise ConflictError('Avaria já resolvida')

    campos = {
        'estado': ESTADO_AVARIA_RESOLVIDA,
        'resolvido_em': datetime.now(timezone.utc),
        'resolvido_por': gestor_id,
    }
    colecao.atualizar(avaria_id, campos)
    logger.info(f"Avaria {avaria_id} resolvida por {gestor_id}")
    return {**avaria, **campos}
