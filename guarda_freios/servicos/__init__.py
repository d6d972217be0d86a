"""
Módulo de Serviços (Blueprint)

Rotas dos serviços agendados dos tripulantes e do auto-preenchimento
baseado no histórico.
"""

from flask import Blueprint

servicos_bp = Blueprint(
    'servicos_bp',
    __name__,
    url_prefix='/api/servicos'
)

# Importa as rotas no final para evitar dependência circular
from . import routes
