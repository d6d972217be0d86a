"""
Camada de Serviço (Service Layer) dos Serviços Agendados

Criação, listagem e exclusão dos serviços de cada tripulante. A criação
alimenta também o histórico usado no auto-preenchimento.
"""

from datetime import datetime, timezone
from typing import List, Optional

from guarda_freios.core.constants import COLECAO_SERVICOS, ESTADO_SERVICO_AGENDADO
from guarda_freios.core.database import get_colecao
from guarda_freios.core.errors import NotFoundError, ValidationError
from guarda_freios.core.logger import get_logger
from . import historico

logger = get_logger(__name__)


def criar_servico(dados: dict) -> dict:
    """
    Cria o serviço agendado e regista a submissão no histórico.
    As duas escritas são independentes: o histórico é atualizado depois
    de o serviço existir.
    """
    submissao = historico.normalizar_submissao(dados)
    data = dados.get('data')
    if hasattr(data, 'isoformat'):
        data = data.isoformat()
    if not data:
        raise ValidationError('Todos os campos são obrigatórios', erros={'data': ['Campo obrigatório.']})

    servico = {
        'tripulante_id': submissao['tripulante_id'],
        'numero_servico': submissao['numero_servico'],
        'data': data,
        'hora_inicio': submissao['hora_inicio'],
        'hora_fim': submissao['hora_fim'],
        'local_inicio': submissao['local_inicio'],
        'local_fim': submissao['local_fim'],
        'numero_chapa': submissao['numero_chapa'],
        'afetacao': submissao['afetacao'],
        'estado': ESTADO_SERVICO_AGENDADO,
        'observacoes': (
            f"Serviço: {submissao['numero_servico']} | "
            f"Chapa: {submissao['numero_chapa']} | "
            f"Afetação: {submissao['afetacao']}"
        ),
        'criado_em': datetime.now(timezone.utc),
    }

    criado = get_colecao(COLECAO_SERVICOS).adicionar(servico)
    logger.info(f"Serviço {criado['id']} criado para {submissao['tripulante_id']} ({submissao['numero_servico']})")

    historico.registar_submissao(submissao)
    return criado


def _filtro_mes(mes, ano) -> Optional[str]:
    if not mes or not ano:
        return None
    try:
        mes, ano = int(mes), int(ano)
    except (TypeError, ValueError):
        raise ValidationError('mes e ano devem ser numéricos')
    if not 1 <= mes <= 12:
        raise ValidationError('mes deve estar entre 1 e 12')
    return f"{ano:04d}-{mes:02d}-"


def listar_servicos(tripulante_id: str, mes=None, ano=None) -> List[dict]:
    """Serviços do tripulante, por data e hora de início."""
    if not tripulante_id:
        raise ValidationError('tripulante_id é obrigatório')

    prefixo = _filtro_mes(mes, ano)
    servicos = get_colecao(COLECAO_SERVICOS).consultar([('tripulante_id', '==', str(tripulante_id))])
    if prefixo:
        servicos = [s for s in servicos if str(s.get('data', '')).startswith(prefixo)]

    servicos.sort(key=lambda s: (s.get('data', ''), s.get('hora_inicio', '')))
    return servicos


def excluir_servico(servico_id: str, tripulante_id: str) -> None:
    """Exclui um serviço do próprio tripulante."""
    if not tripulante_id:
        raise ValidationError('tripulante_id é obrigatório')

    colecao = get_colecao(COLECAO_SERVICOS)
    servico = colecao.obter(servico_id)
    if servico is None or servico.get('tripulante_id') != str(tripulante_id):
        raise NotFoundError('Serviço não encontrado ou não pertence ao utilizador')

    colecao.excluir(servico_id)
    logger.info(f"Serviço {servico_id} excluído por {tripulante_id}")
