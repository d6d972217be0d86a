"""
Rotas do Módulo de Check-ins
"""

from flask import jsonify

from . import checkins_bp
from . import services as checkins_services
from .forms import CheckInForm
from guarda_freios.core.errors import validar_formulario
from guarda_freios.core.seguranca import login_obrigatorio, verificar_proprietario


@checkins_bp.route('', methods=['POST'])
@login_obrigatorio
def criar():
    form = CheckInForm()
    validar_formulario(form, 'Dados incompletos')

    verificar_proprietario(form.tripulante_id.data)

    checkin = checkins_services.criar_checkin(form.data)
    return jsonify({'success': True, 'checkin': checkin})


@checkins_bp.route('/carreira/<codigo>', methods=['GET'])
@login_obrigatorio
def por_carreira(codigo):
    return jsonify({'success': True, 'checkins': checkins_services.checkins_da_carreira(codigo)})


@checkins_bp.route('/observacoes/<codigo>', methods=['GET'])
@login_obrigatorio
def observacoes(codigo):
    return jsonify({'success': True, 'observacoes': checkins_services.observacoes_da_carreira(codigo)})
