"""
Módulo de Autenticação (Blueprint)

Define o Blueprint do Flask para as rotas de autenticação dos
tripulantes (Login, Registo, Alteração de password).
"""

from flask import Blueprint

# Cria uma instância do Blueprint para 'auth'
auth_bp = Blueprint(
    'auth_bp',
    __name__,
    url_prefix='/api/auth'
)

# Importa as rotas no final para evitar dependência circular
from . import routes
