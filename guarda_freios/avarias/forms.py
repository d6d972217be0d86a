from wtforms import SelectField
from wtforms.validators import DataRequired, Length, Optional

from guarda_freios.core.constants import GRAVIDADES_AVARIA
from guarda_freios.core.forms import FormularioAPI, TextoField


class AvariaForm(FormularioAPI):
    tripulante_id = TextoField('Tripulante', validators=[DataRequired(message="tripulante_id é obrigatório")])
    numero_chapa = TextoField('Chapa', validators=[DataRequired(message="Chapa do veículo é obrigatória")])
    veiculo_id = TextoField('Veículo', validators=[Optional()])
    descricao = TextoField('Descrição', validators=[
        DataRequired(message="Descrição é obrigatória"),
        Length(max=1000, message="Descrição deve ter no máximo 1000 caracteres")
    ])
    gravidade = SelectField('Gravidade', choices=[(g, g) for g in GRAVIDADES_AVARIA],
                            validators=[DataRequired(message="Gravidade é obrigatória")])
