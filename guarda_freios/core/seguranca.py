"""
Módulo de Segurança.

Emissão e verificação dos tokens de acesso (JWT HS256 via Authlib) e
decorators que protegem as rotas da API.
"""

import time
from functools import wraps

from authlib.jose import JoseError, jwt
from flask import current_app, g, request

from .constants import CARGO_GESTOR
from .errors import AuthError, ForbiddenError
from .logger import get_logger

logger = get_logger(__name__)

_CABECALHO_JWT = {'alg': 'HS256'}


def gerar_token(utilizador: dict) -> str:
    """
    Gera o token de acesso de um utilizador autenticado.
    """
    agora = int(time.time())
    payload = {
        'sub': utilizador['numero'],
        'nome': utilizador.get('nome'),
        'cargo': utilizador.get('cargo'),
        'iat': agora,
        'exp': agora + current_app.config['JWT_EXPIRACAO_HORAS'] * 3600,
    }
    token = jwt.encode(_CABECALHO_JWT, payload, current_app.config['SECRET_KEY'])
    return token.decode('utf-8')


def verificar_token(token: str) -> dict:
    """
    Valida assinatura e expiração. Devolve as claims do token.
    """
    try:
        claims = jwt.decode(token, current_app.config['SECRET_KEY'])
        claims.validate(now=int(time.time()))
    except JoseError as e:
        logger.warning(f"Token rejeitado: {e}")
        raise AuthError('Token inválido ou expirado') from e
    return dict(claims)


def _token_do_pedido() -> str:
    cabecalho = request.headers.get('Authorization', '')
    esquema, _, token = cabecalho.partition(' ')
    if esquema.lower() != 'bearer' or not token.strip():
        raise AuthError('Token de acesso em falta')
    return token.strip()


def login_obrigatorio(view):
    """Exige um token válido; disponibiliza as claims em g.tripulante."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        g.tripulante = verificar_token(_token_do_pedido())
        return view(*args, **kwargs)
    return wrapper


def gestor_obrigatorio(view):
    """Exige um token válido de um utilizador com cargo Gestor."""
    @wraps(view)
    @login_obrigatorio
    def wrapper(*args, **kwargs):
        if g.tripulante.get('cargo') != CARGO_GESTOR:
            logger.warning(f"Acesso negado: {g.tripulante.get('sub')} (Cargo: {g.tripulante.get('cargo')})")
            raise ForbiddenError('Apenas gestores podem realizar esta operação')
        return view(*args, **kwargs)
    return wrapper


def verificar_proprietario(tripulante_id) -> str:
    """
    Garante que o tripulante_id do pedido é o do token. Gestores podem
    atuar em nome de qualquer tripulante.
    """
    autenticado = g.tripulante.get('sub')
    if tripulante_id in (None, ''):
        return tripulante_id
    tripulante_id = str(tripulante_id).strip()
    if tripulante_id != autenticado and g.tripulante.get('cargo') != CARGO_GESTOR:
        logger.warning(f"Acesso negado: {autenticado} tentou atuar como {tripulante_id}")
        raise ForbiddenError('Sem permissão para atuar em nome de outro tripulante')
    return tripulante_id
