"""
Rotas do Módulo de GPS
"""

from flask import jsonify

from . import gps_bp
from . import services as gps_services
from .forms import PararGPSForm, PosicaoForm
from guarda_freios.core.errors import validar_formulario
from guarda_freios.core.seguranca import login_obrigatorio, verificar_proprietario


@gps_bp.route('/update', methods=['POST'])
@login_obrigatorio
def atualizar():
    form = PosicaoForm()
    validar_formulario(form, 'Dados incompletos')

    verificar_proprietario(form.tripulante_id.data)

    posicao = gps_services.atualizar_posicao(form.data)
    return jsonify({'success': True, 'position': posicao})


@gps_bp.route('/carreira/<codigo>', methods=['GET'])
@login_obrigatorio
def por_carreira(codigo):
    return jsonify({'success': True, 'positions': gps_services.posicoes_da_carreira(codigo)})


@gps_bp.route('/stop', methods=['POST'])
@login_obrigatorio
def parar():
    form = PararGPSForm()
    validar_formulario(form, 'tripulante_id é obrigatório')

    gps_services.parar_partilha(verificar_proprietario(form.tripulante_id.data))
    return jsonify({'success': True, 'message': 'GPS desativado'})
