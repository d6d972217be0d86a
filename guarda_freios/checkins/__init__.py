"""
Módulo de Check-ins (Blueprint)

Check-ins de rendição dos tripulantes e observações das carreiras.
"""

from flask import Blueprint

checkins_bp = Blueprint(
    'checkins_bp',
    __name__,
    url_prefix='/api/checkins'
)

from . import routes
