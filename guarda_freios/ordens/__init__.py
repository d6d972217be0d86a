"""
Módulo de Ordens de Serviço (Blueprint)

Avisos operacionais com prazo de validade, publicados pelos gestores.
"""

from flask import Blueprint

ordens_bp = Blueprint(
    'ordens_bp',
    __name__,
    url_prefix='/api/ordens'
)

from . import routes
