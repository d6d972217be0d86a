from datetime import datetime, timedelta, timezone

from guarda_freios.core.database import get_colecao
from guarda_freios.core.tarefas import executar_limpeza, iniciar_limpeza_periodica


def _posicao(**alteracoes):
    dados = {
        'tripulante_id': '18001',
        'veiculo_id': '540',
        'carreira_id': '28E',
        'latitude': 38.7139,
        'longitude': -9.1334,
        'precisao': 12,
        'velocidade': 18.5,
    }
    dados.update(alteracoes)
    return dados


# === GPS ===

def test_gps_mantem_uma_posicao_ativa(app, client, auth_headers):
    client.post('/api/gps/update', json=_posicao(), headers=auth_headers)
    response = client.post('/api/gps/update', json=_posicao(latitude=38.72), headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()['position']['ativo'] is True

    with app.app_context():
        posicoes = get_colecao('gps_posicoes').consultar([('tripulante_id', '==', '18001')])
    assert len(posicoes) == 2
    assert [p['latitude'] for p in posicoes if p['ativo']] == [38.72]


def test_gps_dados_incompletos(client, auth_headers):
    dados = _posicao()
    del dados['longitude']
    response = client.post('/api/gps/update', json=dados, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Dados incompletos'


def test_gps_posicoes_da_carreira(client, auth_headers, outro_headers):
    client.post('/api/gps/update', json=_posicao(), headers=auth_headers)
    client.post('/api/gps/update', json=_posicao(tripulante_id='18003', carreira_id='15E'), headers=outro_headers)

    response = client.get('/api/gps/carreira/28E', headers=auth_headers)
    posicoes = response.get_json()['positions']

    assert len(posicoes) == 1
    assert posicoes[0]['tripulante_id'] == '18001'


def test_gps_ignora_posicoes_antigas(app, client, auth_headers):
    with app.app_context():
        get_colecao('gps_posicoes').adicionar({
            'tripulante_id': '18003', 'veiculo_id': '1', 'carreira': '28E',
            'latitude': 38.7, 'longitude': -9.1, 'ativo': True,
            'timestamp': datetime.now(timezone.utc) - timedelta(minutes=10),
        })

    response = client.get('/api/gps/carreira/28E', headers=auth_headers)
    assert response.get_json()['positions'] == []


def test_gps_stop(client, auth_headers):
    client.post('/api/gps/update', json=_posicao(), headers=auth_headers)

    response = client.post('/api/gps/stop', json={'tripulante_id': '18001'}, headers=auth_headers)
    assert response.status_code == 200

    posicoes = client.get('/api/gps/carreira/28E', headers=auth_headers).get_json()['positions']
    assert posicoes == []


def test_gps_nao_move_posicao_de_outro_tripulante(app, client, outro_headers):
    response = client.post('/api/gps/update', json=_posicao(), headers=outro_headers)

    assert response.status_code == 403
    with app.app_context():
        assert get_colecao('gps_posicoes').consultar([('tripulante_id', '==', '18001')]) == []


def test_gps_stop_de_outro_tripulante(client, auth_headers, outro_headers):
    client.post('/api/gps/update', json=_posicao(), headers=auth_headers)

    response = client.post('/api/gps/stop', json={'tripulante_id': '18001'}, headers=outro_headers)
    assert response.status_code == 403

    posicoes = client.get('/api/gps/carreira/28E', headers=auth_headers).get_json()['positions']
    assert len(posicoes) == 1


def test_gps_stop_sem_tripulante(client, auth_headers):
    response = client.post('/api/gps/stop', json={}, headers=auth_headers)
    assert response.status_code == 400


# === CHECK-INS ===

def test_checkin_publica_observacao(client, auth_headers):
    response = client.post('/api/checkins', json={
        'tripulante_id': '18001',
        'local': 'Martim Moniz',
        'veiculo_id': '540',
        'carreira_id': '28E',
    }, headers=auth_headers)
    checkin = response.get_json()['checkin']

    assert response.status_code == 200
    assert checkin['tipo'] == 'Rendição'

    observacoes = client.get('/api/checkins/observacoes/28E', headers=auth_headers).get_json()['observacoes']
    assert len(observacoes) == 1
    assert observacoes[0]['mensagem'] == 'Cheguei ao Martim Moniz'
    assert observacoes[0]['tipo'] == 'Check-in'


def test_checkin_sem_local(client, auth_headers):
    response = client.post('/api/checkins', json={'tripulante_id': '18001'}, headers=auth_headers)
    assert response.status_code == 400


def test_checkin_em_nome_de_outro_tripulante(client, outro_headers):
    response = client.post('/api/checkins', json={'tripulante_id': '18001', 'local': 'Graça'}, headers=outro_headers)
    assert response.status_code == 403


def test_checkins_da_carreira(client, auth_headers, outro_headers):
    for local in ('Martim Moniz', 'Graça'):
        client.post('/api/checkins', json={
            'tripulante_id': '18001', 'local': local, 'carreira_id': '28E',
        }, headers=auth_headers)
    client.post('/api/checkins', json={
        'tripulante_id': '18003', 'local': 'Belém', 'carreira_id': '15E',
    }, headers=outro_headers)

    checkins = client.get('/api/checkins/carreira/28E', headers=auth_headers).get_json()['checkins']
    assert [c['local'] for c in checkins] == ['Graça', 'Martim Moniz']


# === ORDENS DE SERVIÇO ===

def _ordem(**alteracoes):
    dados = {'titulo': 'Desvio', 'mensagem': 'Obras na Rua da Conceição', 'validade_minutos': 60}
    dados.update(alteracoes)
    return dados


def test_ordem_apenas_gestor(client, auth_headers):
    response = client.post('/api/ordens', json=_ordem(), headers=auth_headers)
    assert response.status_code == 403


def test_ordem_publicada_e_listada(client, auth_headers, gestor_headers):
    response = client.post('/api/ordens', json=_ordem(carreira='28E'), headers=gestor_headers)
    ordem = response.get_json()['ordem']

    assert response.status_code == 201
    assert ordem['autor_id'] == '18002'
    assert ordem['ativo'] is True

    client.post('/api/ordens', json=_ordem(titulo='Geral'), headers=gestor_headers)
    client.post('/api/ordens', json=_ordem(titulo='Outra', carreira='15E'), headers=gestor_headers)

    ordens = client.get('/api/ordens?carreira=28E', headers=auth_headers).get_json()['ordens']
    assert sorted(o['titulo'] for o in ordens) == ['Desvio', 'Geral']


def test_ordem_validade_obrigatoria(client, gestor_headers):
    response = client.post('/api/ordens', json=_ordem(validade_minutos=0), headers=gestor_headers)
    assert response.status_code == 400


def test_remover_ordem(client, auth_headers, gestor_headers):
    ordem_id = client.post('/api/ordens', json=_ordem(), headers=gestor_headers).get_json()['ordem']['id']

    assert client.delete(f'/api/ordens/{ordem_id}', headers=gestor_headers).status_code == 200
    assert client.get('/api/ordens', headers=auth_headers).get_json()['ordens'] == []
    assert client.delete(f'/api/ordens/{ordem_id}', headers=gestor_headers).status_code == 404


def test_limpeza_desativa_ordens_expiradas(app):
    agora = datetime.now(timezone.utc)
    with app.app_context():
        ordens = get_colecao('ordens_servico')
        expirada = ordens.adicionar({
            'titulo': 'Antiga', 'mensagem': '...', 'carreira': None, 'autor_id': '18002',
            'criado_em': agora - timedelta(hours=2), 'expira_em': agora - timedelta(minutes=1),
            'ativo': True, 'removido_em': None,
        })
        valida = ordens.adicionar({
            'titulo': 'Atual', 'mensagem': '...', 'carreira': None, 'autor_id': '18002',
            'criado_em': agora, 'expira_em': agora + timedelta(hours=1),
            'ativo': True, 'removido_em': None,
        })
        get_colecao('observacoes').adicionar({
            'carreira': '28E', 'mensagem': 'Velha', 'timestamp': agora - timedelta(hours=30),
        })

    resultado = executar_limpeza(app)

    assert resultado == {'ordens_expiradas': 1, 'observacoes_removidas': 1}
    with app.app_context():
        # Soft delete: a ordem continua guardada, apenas inativa
        antiga = get_colecao('ordens_servico').obter(expirada['id'])
        assert antiga['ativo'] is False
        assert antiga['removido_em'] is not None
        assert get_colecao('ordens_servico').obter(valida['id'])['ativo'] is True


def test_limpeza_periodica_desligada_em_testes(app):
    assert iniciar_limpeza_periodica(app) is None


# === AVARIAS ===

def _avaria(**alteracoes):
    dados = {'tripulante_id': '18001', 'numero_chapa': '540', 'descricao': 'Pantógrafo solto', 'gravidade': 'Alta'}
    dados.update(alteracoes)
    return dados


def test_reportar_e_resolver_avaria(client, auth_headers, gestor_headers):
    response = client.post('/api/avarias', json=_avaria(), headers=auth_headers)
    avaria = response.get_json()['avaria']

    assert response.status_code == 201
    assert avaria['estado'] == 'Aberta'

    assert client.post(f"/api/avarias/{avaria['id']}/resolver", headers=auth_headers).status_code == 403

    response = client.post(f"/api/avarias/{avaria['id']}/resolver", headers=gestor_headers)
    assert response.status_code == 200
    assert response.get_json()['avaria']['estado'] == 'Resolvida'
    assert response.get_json()['avaria']['resolvido_por'] == '18002'

    segunda = client.post(f"/api/avarias/{avaria['id']}/resolver", headers=gestor_headers)
    assert segunda.status_code == 409


def test_avaria_gravidade_invalida(client, auth_headers):
    response = client.post('/api/avarias', json=_avaria(gravidade='Urgente'), headers=auth_headers)
    assert response.status_code == 400
    assert 'gravidade' in response.get_json()['erros']


def test_listar_avarias_por_estado(client, auth_headers, gestor_headers):
    primeira = client.post('/api/avarias', json=_avaria(), headers=auth_headers).get_json()['avaria']
    client.post('/api/avarias', json=_avaria(numero_chapa='612', gravidade='Baixa'), headers=auth_headers)
    client.post(f"/api/avarias/{primeira['id']}/resolver", headers=gestor_headers)

    abertas = client.get('/api/avarias?estado=Aberta', headers=auth_headers).get_json()['avarias']
    assert [a['numero_chapa'] for a in abertas] == ['612']

    assert client.get('/api/avarias?estado=Fechada', headers=auth_headers).status_code == 400


def test_avaria_em_nome_de_outro_tripulante(client, outro_headers):
    response = client.post('/api/avarias', json=_avaria(), headers=outro_headers)
    assert response.status_code == 403


def test_resolver_avaria_inexistente(client, gestor_headers):
    assert client.post('/api/avarias/nao-existe/resolver', headers=gestor_headers).status_code == 404
