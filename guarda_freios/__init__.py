"""
Módulo Principal da Aplicação (Application Factory)
"""

from datetime import date, datetime

from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider
from werkzeug.middleware.proxy_fix import ProxyFix  # Necessário atrás do proxy do Cloud Run
from config import Config

from .core import database
from .core.errors import register_error_handlers
from .core.extensions import limiter
from .core.tarefas import iniciar_limpeza_periodica


class JSONProvider(DefaultJSONProvider):
    """Datas em ISO 8601 em vez do formato HTTP padrão do Flask."""

    @staticmethod
    def default(o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def create_app(config_class=Config):
    """
    Cria e configura uma instância da aplicação Flask.
    """

    app = Flask(__name__)
    app.json = JSONProvider(app)

    # Ajusta o Flask para entender que está atrás de um Proxy
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    # 1. Carrega a configuração
    app.config.from_object(config_class)
    app.json.sort_keys = app.config.get('JSON_SORT_KEYS', False)

    # 2. Inicializa as extensões e o armazenamento
    limiter.init_app(app)
    database.init_app(app)
    register_error_handlers(app)

    # 3. Configura os Blueprints (Módulos)
    from .auth import auth_bp
    app.register_blueprint(auth_bp)

    from .servicos import servicos_bp
    app.register_blueprint(servicos_bp)

    from .gps import gps_bp
    app.register_blueprint(gps_bp)

    from .checkins import checkins_bp
    app.register_blueprint(checkins_bp)

    from .ordens import ordens_bp
    app.register_blueprint(ordens_bp)

    from .avarias import avarias_bp
    app.register_blueprint(avarias_bp)

    # 4. Rota de Health Check
    @app.route("/health")
    @limiter.exempt
    def health_check():
        return jsonify({'success': True, 'message': 'API do Guarda-Freios a funcionar'}), 200

    # 5. Limpeza periódica de ordens expiradas e observações antigas
    iniciar_limpeza_periodica(app)

    return app
