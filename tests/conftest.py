import os

# O config.py falha sem SECRET_KEY; tem de existir antes do import
os.environ.setdefault('SECRET_KEY', 'chave-de-testes')

import pytest

from config import TestConfig
from guarda_freios import create_app
from guarda_freios.auth import services as auth_services

PASSWORD_TESTE = 'segredo123'


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        auth_services.registar_utilizador('18001', 'António Silva', 'antonio.silva@carris.pt', PASSWORD_TESTE)
        auth_services.registar_utilizador('18002', 'João Gestor', 'joao.gestor@carris.pt', PASSWORD_TESTE)
        auth_services.registar_utilizador('18003', 'Carla Mendes', 'carla.mendes@carris.pt', PASSWORD_TESTE)
        auth_services.promover_a_gestor('18002')
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def _login(client, numero):
    response = client.post('/api/auth/login', json={'numero': numero, 'password': PASSWORD_TESTE})
    assert response.status_code == 200
    return {'Authorization': f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def auth_headers(client):
    """Cabeçalhos de um tripulante autenticado (18001)."""
    return _login(client, '18001')


@pytest.fixture
def outro_headers(client):
    """Cabeçalhos de outro tripulante (18003)."""
    return _login(client, '18003')


@pytest.fixture
def gestor_headers(client):
    """Cabeçalhos de um gestor autenticado (18002)."""
    return _login(client, '18002')


@pytest.fixture
def servico_payload():
    return {
        'tripulante_id': '18001',
        'numero_servico': 'A1',
        'data': '2025-03-10',
        'local_inicio': 'Garagem',
        'local_fim': 'Terminal',
        'hora_inicio': '07:00',
        'hora_fim': '15:00',
        'numero_chapa': '540',
        'afetacao': 'Carreira 28E',
    }
