"""
Rotas do Módulo de Avarias
"""

from flask import g, jsonify, request

from . import avarias_bp
from . import services as avarias_services
from .forms import AvariaForm
from guarda_freios.core.errors import validar_formulario
from guarda_freios.core.seguranca import gestor_obrigatorio, login_obrigatorio, verificar_proprietario


@avarias_bp.route('', methods=['GET'])
@login_obrigatorio
def listar():
    avarias = avarias_services.listar_avarias(request.args.get('estado'))
    return jsonify({'success': True, 'avarias': avarias})


@avarias_bp.route('', methods=['POST'])
@login_obrigatorio
def reportar():
    form = AvariaForm()
    validar_formulario(form, 'Dados incompletos')

    verificar_proprietario(form.tripulante_id.data)

    avaria = avarias_services.reportar_avaria(form.data)
    return jsonify({'success': True, 'message': 'Avaria reportada', 'avaria': avaria}), 201


@avarias_bp.route('/<avaria_id>/resolver', methods=['POST'])
@gestor_obrigatorio
def resolver(avaria_id):
    avaria = avarias_services.resolver_avaria(avaria_id, g.tripulante['sub'])
    return jsonify({'success': True, 'message': 'Avaria resolvida', 'avaria': avaria})
