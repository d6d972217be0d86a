"""
Módulo Central de Extensões.
Evita importações circulares centralizando as instâncias das extensões.
"""
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Rate Limiting. O storage vem de RATELIMIT_STORAGE_URI (config.py).
# Limites folgados: o GPS envia posições a cada poucos segundos.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["5000 per day", "1000 per hour"]
)
