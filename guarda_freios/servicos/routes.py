"""
Rotas do Módulo de Serviços

GET    /api/servicos                      -> serviços do tripulante
GET    /api/servicos/auto-preenchimento   -> sugestão do histórico
POST   /api/servicos                      -> cria serviço (+ histórico)
DELETE /api/servicos/<id>                 -> exclui serviço próprio
"""

from flask import jsonify, request

from . import servicos_bp
from . import historico
from . import services as servicos_services
from .forms import ServicoForm
from guarda_freios.core.errors import validar_formulario
from guarda_freios.core.seguranca import login_obrigatorio, verificar_proprietario


@servicos_bp.route('', methods=['GET'])
@login_obrigatorio
def listar():
    servicos = servicos_services.listar_servicos(
        verificar_proprietario(request.args.get('tripulante_id')),
        mes=request.args.get('mes'),
        ano=request.args.get('ano'),
    )
    return jsonify({'success': True, 'servicos': servicos})


@servicos_bp.route('/auto-preenchimento', methods=['GET'])
@login_obrigatorio
def auto_preenchimento():
    sugestao = historico.obter_sugestao(
        verificar_proprietario(request.args.get('tripulante_id')),
        request.args.get('numero_servico'),
    )
    if sugestao is None:
        return jsonify({'success': True, 'auto_preenchimento': False})

    return jsonify({'success': True, 'auto_preenchimento': True, 'dados': sugestao})


@servicos_bp.route('', methods=['POST'])
@login_obrigatorio
def criar():
    form = ServicoForm()
    validar_formulario(form, 'Todos os campos são obrigatórios')

    verificar_proprietario(form.tripulante_id.data)

    servico = servicos_services.criar_servico({**form.data, 'data': form.data_servico.data})
    return jsonify({
        'success': True,
        'message': 'Serviço criado com sucesso',
        'servico': servico
    }), 201


@servicos_bp.route('/<servico_id>', methods=['DELETE'])
@login_obrigatorio
def excluir(servico_id):
    tripulante_id = verificar_proprietario(request.args.get('tripulante_id'))
    servicos_services.excluir_servico(servico_id, tripulante_id)
    return jsonify({'success': True, 'message': 'Serviço excluído com sucesso'})
