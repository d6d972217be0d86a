"""
Módulo de Erros da API.

Define a hierarquia de exceções usada pelas camadas de serviço e os
handlers que as convertem em respostas JSON {success: false, message}.
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException

from .logger import get_logger

logger = get_logger(__name__)


class APIError(Exception):
    """Erro base com código HTTP e mensagem segura para o cliente."""

    status_code = 500
    message = 'Erro no servidor'

    def __init__(self, message=None, erros=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.erros = erros

    def to_dict(self) -> dict:
        corpo = {'success': False, 'message': self.message}
        if self.erros:
            corpo['erros'] = self.erros
        return corpo


class ValidationError(APIError):
    status_code = 400
    message = 'Dados inválidos'


class AuthError(APIError):
    status_code = 401
    message = 'Autenticação necessária'


class ForbiddenError(APIError):
    status_code = 403
    message = 'Acesso negado'


class NotFoundError(APIError):
    status_code = 404
    message = 'Recurso não encontrado'


class ConflictError(APIError):
    status_code = 409
    message = 'Recurso já existe'


class StorageError(APIError):
    """Falha inesperada do armazenamento. O detalhe fica apenas no log."""
    status_code = 500
    message = 'Erro no servidor'


def validar_formulario(form, mensagem: str = 'Dados incompletos'):
    """
    Valida um FlaskForm submetido e levanta ValidationError com os erros do form.
    """
    if not form.validate_on_submit():
        # Erros indexados pelo nome do campo no JSON, não pelo atributo do form
        erros = {
            (form[campo].name if campo in form else campo): mensagens
            for campo, mensagens in form.errors.items()
        }
        raise ValidationError(mensagem, erros=erros)


def register_error_handlers(app):
    """Regista os handlers JSON na aplicação."""

    @app.errorhandler(APIError)
    def handle_api_error(erro):
        if erro.status_code >= 500:
            logger.error(f"{type(erro).__name__}: {erro.__cause__ or erro}")
        return jsonify(erro.to_dict()), erro.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(erro):
        return jsonify({'success': False, 'message': erro.description}), erro.code

    @app.errorhandler(Exception)
    def handle_unexpected(erro):
        logger.error(f"Erro não tratado: {erro}", exc_info=True)
        return jsonify({'success': False, 'message': 'Erro no servidor'}), 500
