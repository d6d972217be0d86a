"""
Base dos formulários da API.

Os pedidos chegam em JSON; o Flask-WTF converte o corpo num MultiDict e os
formulários abaixo tratam os valores como texto, mesmo quando o cliente
envia números (ex.: número de funcionário 18001).
"""

from flask_wtf import FlaskForm
from wtforms import FloatField, StringField


class FormularioAPI(FlaskForm):
    class Meta:
        csrf = False  # API autenticada por token, não por cookie de sessão


class TextoField(StringField):
    """StringField que converte qualquer valor JSON em texto sem espaços nas pontas."""

    def process_formdata(self, valuelist):
        if valuelist and valuelist[0] is not None:
            self.data = str(valuelist[0]).strip()
        else:
            self.data = None


class NumeroField(FloatField):
    """FloatField que aceita números JSON e texto numérico."""

    def process_formdata(self, valuelist):
        if not valuelist or valuelist[0] in (None, ''):
            self.data = None
            return
        try:
            self.data = float(valuelist[0])
        except (TypeError, ValueError):
            self.data = None
            raise ValueError(self.gettext('Not a valid float value.'))
