"""
Módulo de Avarias (Blueprint)

Reportes de avarias de veículos feitos pelos tripulantes.
"""

from flask import Blueprint

avarias_bp = Blueprint(
    'avarias_bp',
    __name__,
    url_prefix='/api/avarias'
)

from . import routes
