from wtforms import IntegerField
from wtforms.validators import DataRequired, Length, NumberRange, Optional

from guarda_freios.core.forms import FormularioAPI, TextoField

# Uma ordem vale no máximo uma semana
VALIDADE_MAXIMA_MINUTOS = 7 * 24 * 60


class OrdemServicoForm(FormularioAPI):
    titulo = TextoField('Título', validators=[
        DataRequired(message="Título é obrigatório"),
        Length(max=120, message="Título deve ter no máximo 120 caracteres")
    ])
    mensagem = TextoField('Mensagem', validators=[DataRequired(message="Mensagem é obrigatória")])
    carreira = TextoField('Carreira', validators=[Optional()])
    validade_minutos = IntegerField('Validade (minutos)', validators=[
        DataRequired(message="Validade é obrigatória"),
        NumberRange(min=1, max=VALIDADE_MAXIMA_MINUTOS,
                    message=f"Validade deve estar entre 1 e {VALIDADE_MAXIMA_MINUTOS} minutos")
    ])
