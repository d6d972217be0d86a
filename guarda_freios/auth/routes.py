"""
Rotas do Módulo de Autenticação

Gerencia as rotas de login, registo e alteração de password.
"""

from flask import jsonify

from . import auth_bp
from . import services as auth_services
from .forms import AlterarPasswordForm, LoginForm, RegistoForm
from guarda_freios.core.errors import validar_formulario
from guarda_freios.core.extensions import limiter
from guarda_freios.core.seguranca import gerar_token


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("10 per minute")
def login():
    """ Troca número + password por um token de acesso. """
    form = LoginForm()
    validar_formulario(form, 'Número e password são obrigatórios')

    utilizador = auth_services.autenticar(form.numero.data, form.password.data)

    return jsonify({
        'success': True,
        'token': gerar_token(utilizador),
        'user': auth_services.dados_publicos(utilizador)
    })


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per minute")
def register():
    form = RegistoForm()
    validar_formulario(form, 'Todos os campos são obrigatórios')

    utilizador = auth_services.registar_utilizador(
        form.numero.data,
        form.nome.data,
        form.email.data,
        form.password.data,
    )

    return jsonify({
        'success': True,
        'message': 'Conta criada com sucesso',
        'user': auth_services.dados_publicos(utilizador)
    }), 201


@auth_bp.route('/change-password', methods=['POST'])
@limiter.limit("10 per minute")
def change_password():
    form = AlterarPasswordForm()
    validar_formulario(form, 'Todos os campos são obrigatórios')

    auth_services.alterar_password(
        form.numero.data,
        form.currentPassword.data,
        form.newPassword.data,
    )
    return jsonify({'success': True, 'message': 'Password alterada com sucesso'})
