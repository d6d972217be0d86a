"""
Camada de Serviço (Service Layer) da Autenticação

Responsável pela lógica de banco de dados dos utilizadores (tripulantes e
gestores): login, registo e alteração de password.
"""

from datetime import datetime, timezone
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from guarda_freios.core.constants import CARGO_GESTOR, CARGO_TRIPULANTE, COLECAO_UTILIZADORES
from guarda_freios.core.database import get_colecao
from guarda_freios.core.errors import AuthError, ConflictError, NotFoundError
from guarda_freios.core.logger import get_logger

# Inicializa o logger para este módulo
logger = get_logger(__name__)


def dados_publicos(utilizador: dict) -> dict:
    """Dados do utilizador que podem ir para o cliente (sem hash)."""
    return {
        'id': utilizador.get('numero'),
        'numero': utilizador.get('numero'),
        'nome': utilizador.get('nome'),
        'cargo': utilizador.get('cargo'),
        'email': utilizador.get('email'),
    }


def obter_utilizador(numero: str) -> Optional[dict]:
    """
    Busca um utilizador pelo número de funcionário.
    """
    # O número é o ID do documento; '/' criaria um caminho de subcoleção
    if not numero or '/' in numero:
        return None
    return get_colecao(COLECAO_UTILIZADORES).obter(numero)


def autenticar(numero: str, password: str) -> dict:
    """
    Verifica as credenciais. Devolve o utilizador ou levanta AuthError.
    """
    utilizador = obter_utilizador(numero)

    if utilizador is None or not utilizador.get('ativo', False):
        logger.warning(f"Login recusado: {numero} não encontrado ou inativo")
        raise AuthError('Funcionário não encontrado')

    if not check_password_hash(utilizador.get('password_hash', ''), password):
        logger.warning(f"Login recusado: password incorreta para {numero}")
        raise AuthError('Password incorreta')

    logger.info(f"Login efetuado: {numero} (Cargo: {utilizador.get('cargo')})")
    return utilizador


def registar_utilizador(numero: str, nome: str, email: str, password: str) -> dict:
    """
    Cria um novo utilizador. Todos nascem Tripulante; a promoção a Gestor
    é feita com o script promover_gestor.py.
    """
    colecao = get_colecao(COLECAO_UTILIZADORES)
    email = email.lower()

    if colecao.obter(numero) is not None:
        raise ConflictError('Número de funcionário já registado')

    if colecao.consultar([('email', '==', email)], limite=1):
        raise ConflictError('Email já registado')

    agora = datetime.now(timezone.utc)
    # Criação condicional: dois registos simultâneos do mesmo número não se sobrepõem
    novo = colecao.criar(numero, {
        'numero': numero,
        'nome': nome,
        'email': email,
        'cargo': CARGO_TRIPULANTE,  # Padrão de segurança: ninguém nasce gestor
        'password_hash': generate_password_hash(password),
        'ativo': True,
        'criado_em': agora,
        'atualizado_em': agora,
    })
    if novo is None:
        raise ConflictError('Número de funcionário já registado')

    logger.info(f"Novo utilizador registado: {numero}")
    return novo


def alterar_password(numero: str, password_atual: str, nova_password: str) -> None:
    utilizador = obter_utilizador(numero)

    if utilizador is None:
        raise NotFoundError('Utilizador não encontrado')

    if not check_password_hash(utilizador.get('password_hash', ''), password_atual):
        logger.warning(f"Alteração de password recusada para {numero}")
        raise AuthError('Password atual incorreta')

    get_colecao(COLECAO_UTILIZADORES).atualizar(numero, {
        'password_hash': generate_password_hash(nova_password),
        'atualizado_em': datetime.now(timezone.utc),
    })
    logger.info(f"Password alterada: {numero}")


def promover_a_gestor(numero: str) -> bool:
    """Atribui o cargo Gestor. Devolve False se o utilizador não existir."""
    promovido = get_colecao(COLECAO_UTILIZADORES).atualizar(numero, {
        'cargo': CARGO_GESTOR,
        'atualizado_em': datetime.now(timezone.utc),
    })
    if promovido:
        logger.info(f"Utilizador {numero} promovido a {CARGO_GESTOR}")
    return promovido
