"""
Rotas do Módulo de Ordens de Serviço
"""

from flask import g, jsonify, request

from . import ordens_bp
from . import services as ordens_services
from .forms import OrdemServicoForm
from guarda_freios.core.errors import validar_formulario
from guarda_freios.core.seguranca import gestor_obrigatorio, login_obrigatorio


@ordens_bp.route('', methods=['GET'])
@login_obrigatorio
def listar():
    ordens = ordens_services.listar_ativas(request.args.get('carreira'))
    return jsonify({'success': True, 'ordens': ordens})


@ordens_bp.route('', methods=['POST'])
@gestor_obrigatorio
def criar():
    form = OrdemServicoForm()
    validar_formulario(form, 'Dados incompletos')

    ordem = ordens_services.criar_ordem(form.data, autor_id=g.tripulante['sub'])
    return jsonify({'success': True, 'message': 'Ordem de serviço publicada', 'ordem': ordem}), 201


@ordens_bp.route('/<ordem_id>', methods=['DELETE'])
@gestor_obrigatorio
def remover(ordem_id):
    ordens_services.remover_ordem(ordem_id)
    return jsonify({'success': True, 'message': 'Ordem de serviço removida'})
