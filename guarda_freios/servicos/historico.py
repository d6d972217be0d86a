"""
Histórico de Serviços e Auto-preenchimento

Cada par (tripulante, número de serviço) tem um registo agregado com os
últimos valores submetidos, quantas vezes o serviço foi submetido
('contagem') e quantas submissões alteraram os valores guardados depois
de o serviço já se ter repetido ('edicoes_count').

Quando um serviço se repete AUTO_PREENCHIMENTO_MINIMO vezes, os valores
guardados passam a ser sugeridos ao cliente para pré-preencher o formulário.
"""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote

from guarda_freios.core.constants import (
    AUTO_PREENCHIMENTO_MINIMO,
    CAMPOS_HISTORICO,
    COLECAO_HISTORICO,
    EDICOES_CONTAGEM_MINIMA,
)
from guarda_freios.core.database import get_colecao
from guarda_freios.core.errors import ValidationError
from guarda_freios.core.logger import get_logger

logger = get_logger(__name__)

CAMPOS_SUBMISSAO = ('tripulante_id', 'numero_servico') + CAMPOS_HISTORICO


def _texto(valor) -> str:
    return '' if valor is None else str(valor).strip()


def chave_historico(tripulante_id, numero_servico) -> str:
    """
    ID do documento agregado. Cada parte é codificada por completo, pelo que
    ':' nunca aparece dentro delas e pares diferentes nunca colidem.
    """
    return f"{quote(_texto(tripulante_id), safe='')}:{quote(_texto(numero_servico), safe='')}"


def normalizar_submissao(dados: dict) -> dict:
    """
    Extrai e normaliza os oito campos da submissão.
    Levanta ValidationError se algum faltar ou estiver vazio.
    """
    submissao = {campo: _texto(dados.get(campo)) for campo in CAMPOS_SUBMISSAO}
    em_falta = [campo for campo, valor in submissao.items() if not valor]
    if em_falta:
        raise ValidationError(
            'Todos os campos são obrigatórios',
            erros={campo: ['Campo obrigatório.'] for campo in em_falta},
        )
    return submissao


def calcular_proximo_estado(atual: Optional[dict], submissao: dict, agora: datetime) -> dict:
    """
    Novo estado do agregado a partir do estado guardado e de uma submissão.

    - Sem registo: contagem 1, edições 0.
    - Com registo: valores substituídos, contagem + 1; as edições sobem quando
      a contagem guardada (antes do incremento) é >= EDICOES_CONTAGEM_MINIMA e
      pelo menos um dos campos mudou.
    """
    novo = {
        'tripulante_id': submissao['tripulante_id'],
        'numero_servico': submissao['numero_servico'],
        **{campo: submissao[campo] for campo in CAMPOS_HISTORICO},
        'ultima_edicao': agora,
    }

    if atual is None:
        novo['contagem'] = 1
        novo['edicoes_count'] = 0
        return novo

    contagem = atual.get('contagem', 0)
    edicoes = atual.get('edicoes_count', 0)
    alterado = any(atual.get(campo) != submissao[campo] for campo in CAMPOS_HISTORICO)

    if contagem >= EDICOES_CONTAGEM_MINIMA and alterado:
        edicoes += 1

    novo['contagem'] = contagem + 1
    novo['edicoes_count'] = edicoes
    return novo


def registar_submissao(dados: dict) -> dict:
    """
    Regista uma submissão de serviço no histórico (upsert atómico).
    """
    submissao = normalizar_submissao(dados)
    doc_id = chave_historico(submissao['tripulante_id'], submissao['numero_servico'])
    agora = datetime.now(timezone.utc)

    historico = get_colecao(COLECAO_HISTORICO).transacao(
        doc_id,
        lambda atual: calcular_proximo_estado(atual, submissao, agora),
    )

    logger.info(
        f"Histórico atualizado: {doc_id} "
        f"(contagem={historico['contagem']}, edicoes={historico['edicoes_count']})"
    )
    return historico


def obter_historico(tripulante_id, numero_servico) -> Optional[dict]:
    return get_colecao(COLECAO_HISTORICO).obter(chave_historico(tripulante_id, numero_servico))


def obter_sugestao(tripulante_id, numero_servico) -> Optional[dict]:
    """
    Devolve os valores a pré-preencher, ou None se o serviço ainda não se
    repetiu o suficiente. Só leitura.
    """
    if not _texto(tripulante_id) or not _texto(numero_servico):
        raise ValidationError('tripulante_id e numero_servico são obrigatórios')

    historico = obter_historico(tripulante_id, numero_servico)
    if historico is None or historico.get('contagem', 0) < AUTO_PREENCHIMENTO_MINIMO:
        return None

    return {campo: historico.get(campo) for campo in CAMPOS_HISTORICO}
