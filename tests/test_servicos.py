from unittest.mock import patch

import pytest

from guarda_freios.core.database import ColecaoMemoria
from guarda_freios.core.errors import StorageError
from guarda_freios.servicos import historico


def _auto_preenchimento(client, headers, tripulante_id='18001', numero_servico='A1'):
    return client.get(
        f'/api/servicos/auto-preenchimento?tripulante_id={tripulante_id}&numero_servico={numero_servico}',
        headers=headers,
    )


def test_criar_servico(client, auth_headers, servico_payload):
    response = client.post('/api/servicos', json=servico_payload, headers=auth_headers)
    dados = response.get_json()

    assert response.status_code == 201
    assert dados['success'] is True
    assert dados['message'] == 'Serviço criado com sucesso'

    servico = dados['servico']
    assert servico['id']
    assert servico['data'] == '2025-03-10'
    assert servico['estado'] == 'Agendado'
    assert servico['observacoes'] == 'Serviço: A1 | Chapa: 540 | Afetação: Carreira 28E'


def test_criar_servico_regista_historico(app, client, auth_headers, servico_payload):
    client.post('/api/servicos', json=servico_payload, headers=auth_headers)

    with app.app_context():
        registo = historico.obter_historico('18001', 'A1')

    assert registo['contagem'] == 1
    assert registo['edicoes_count'] == 0


def test_criar_servico_sem_chapa_nao_toca_historico(app, client, auth_headers, servico_payload):
    client.post('/api/servicos', json=servico_payload, headers=auth_headers)
    del servico_payload['numero_chapa']

    response = client.post('/api/servicos', json=servico_payload, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()['success'] is False
    assert 'numero_chapa' in response.get_json()['erros']
    with app.app_context():
        assert historico.obter_historico('18001', 'A1')['contagem'] == 1


def test_criar_servico_data_invalida(client, auth_headers, servico_payload):
    servico_payload['data'] = '10/03/2025'
    response = client.post('/api/servicos', json=servico_payload, headers=auth_headers)
    assert response.status_code == 400
    assert 'data' in response.get_json()['erros']


def test_criar_servico_guarda_todos_os_campos(app, client, auth_headers, servico_payload):
    response = client.post('/api/servicos', json=servico_payload, headers=auth_headers)
    servico = response.get_json()['servico']

    assert response.status_code == 201
    for campo, valor in servico_payload.items():
        assert servico[campo] == valor

    with app.app_context():
        registo = historico.obter_historico('18001', 'A1')
    assert registo['numero_chapa'] == '540'
    assert registo['afetacao'] == 'Carreira 28E'


def test_auto_preenchimento_apos_cinco_submissoes(client, auth_headers, servico_payload):
    for _ in range(5):
        response = client.post('/api/servicos', json=servico_payload, headers=auth_headers)
        assert response.status_code == 201

    response = _auto_preenchimento(client, auth_headers)
    dados = response.get_json()

    assert response.status_code == 200
    assert dados['success'] is True
    assert dados['auto_preenchimento'] is True
    assert dados['dados'] == {
        'local_inicio': 'Garagem',
        'local_fim': 'Terminal',
        'hora_inicio': '07:00',
        'hora_fim': '15:00',
        'numero_chapa': '540',
        'afetacao': 'Carreira 28E',
    }


@pytest.mark.parametrize('submissoes', [0, 1, 2, 3, 4])
def test_sem_auto_preenchimento_abaixo_de_cinco(client, auth_headers, servico_payload, submissoes):
    for _ in range(submissoes):
        client.post('/api/servicos', json=servico_payload, headers=auth_headers)

    response = _auto_preenchimento(client, auth_headers)
    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'auto_preenchimento': False}


def test_auto_preenchimento_devolve_ultimos_valores(client, auth_headers, servico_payload):
    for _ in range(5):
        client.post('/api/servicos', json=servico_payload, headers=auth_headers)
    servico_payload['numero_chapa'] = '612'
    client.post('/api/servicos', json=servico_payload, headers=auth_headers)

    dados = _auto_preenchimento(client, auth_headers).get_json()
    assert dados['dados']['numero_chapa'] == '612'


def test_auto_preenchimento_parametros_em_falta(client, auth_headers):
    response = client.get('/api/servicos/auto-preenchimento?tripulante_id=18001', headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json() == {
        'success': False,
        'message': 'tripulante_id e numero_servico são obrigatórios',
    }


def test_falha_no_armazenamento_devolve_500(client, auth_headers, servico_payload):
    with patch.object(ColecaoMemoria, 'transacao', side_effect=StorageError()):
        response = client.post('/api/servicos', json=servico_payload, headers=auth_headers)

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Erro no servidor'}


def test_listar_servicos_ordenados(client, auth_headers, outro_headers, servico_payload):
    for data, hora in [('2025-03-12', '07:00'), ('2025-03-10', '14:00'), ('2025-03-10', '06:00')]:
        client.post('/api/servicos', json={**servico_payload, 'data': data, 'hora_inicio': hora},
                    headers=auth_headers)
    client.post('/api/servicos', json={**servico_payload, 'tripulante_id': '18003'}, headers=outro_headers)

    response = client.get('/api/servicos?tripulante_id=18001', headers=auth_headers)
    servicos = response.get_json()['servicos']

    assert [(s['data'], s['hora_inicio']) for s in servicos] == [
        ('2025-03-10', '06:00'),
        ('2025-03-10', '14:00'),
        ('2025-03-12', '07:00'),
    ]


def test_listar_servicos_por_mes(client, auth_headers, servico_payload):
    client.post('/api/servicos', json={**servico_payload, 'data': '2025-03-10'}, headers=auth_headers)
    client.post('/api/servicos', json={**servico_payload, 'data': '2025-04-02'}, headers=auth_headers)

    response = client.get('/api/servicos?tripulante_id=18001&mes=4&ano=2025', headers=auth_headers)
    servicos = response.get_json()['servicos']

    assert [s['data'] for s in servicos] == ['2025-04-02']


def test_listar_servicos_sem_tripulante(client, auth_headers):
    response = client.get('/api/servicos', headers=auth_headers)
    assert response.status_code == 400


def test_excluir_servico(client, auth_headers, servico_payload):
    servico_id = client.post('/api/servicos', json=servico_payload, headers=auth_headers).get_json()['servico']['id']

    response = client.delete(f'/api/servicos/{servico_id}?tripulante_id=18001', headers=auth_headers)
    assert response.status_code == 200

    restantes = client.get('/api/servicos?tripulante_id=18001', headers=auth_headers).get_json()['servicos']
    assert restantes == []


def test_excluir_servico_que_nao_pertence_ao_tripulante(client, auth_headers, outro_headers, servico_payload):
    servico_id = client.post('/api/servicos', json=servico_payload, headers=auth_headers).get_json()['servico']['id']

    response = client.delete(f'/api/servicos/{servico_id}?tripulante_id=18003', headers=outro_headers)
    assert response.status_code == 404


def test_excluir_servico_com_token_de_outro_tripulante(client, auth_headers, outro_headers, servico_payload):
    servico_id = client.post('/api/servicos', json=servico_payload, headers=auth_headers).get_json()['servico']['id']

    response = client.delete(f'/api/servicos/{servico_id}?tripulante_id=18001', headers=outro_headers)
    assert response.status_code == 403
    assert response.get_json()['success'] is False

    restantes = client.get('/api/servicos?tripulante_id=18001', headers=auth_headers).get_json()['servicos']
    assert [s['id'] for s in restantes] == [servico_id]


def test_criar_servico_em_nome_de_outro_tripulante(app, client, outro_headers, servico_payload):
    response = client.post('/api/servicos', json=servico_payload, headers=outro_headers)

    assert response.status_code == 403
    with app.app_context():
        assert historico.obter_historico('18001', 'A1') is None


def test_listar_servicos_de_outro_tripulante(client, outro_headers):
    response = client.get('/api/servicos?tripulante_id=18001', headers=outro_headers)
    assert response.status_code == 403


def test_gestor_pode_atuar_por_tripulante(client, auth_headers, gestor_headers, servico_payload):
    response = client.post('/api/servicos', json=servico_payload, headers=gestor_headers)
    assert response.status_code == 201

    servicos = client.get('/api/servicos?tripulante_id=18001', headers=auth_headers).get_json()['servicos']
    assert len(servicos) == 1


def test_excluir_servico_mantem_historico(app, client, auth_headers, servico_payload):
    servico_id = client.post('/api/servicos', json=servico_payload, headers=auth_headers).get_json()['servico']['id']
    client.delete(f'/api/servicos/{servico_id}?tripulante_id=18001', headers=auth_headers)

    with app.app_context():
        assert historico.obter_historico('18001', 'A1')['contagem'] == 1
