"""
Módulo de GPS (Blueprint)

Partilha da posição dos tripulantes em serviço.
"""

from flask import Blueprint

gps_bp = Blueprint(
    'gps_bp',
    __name__,
    url_prefix='/api/gps'
)

from . import routes
