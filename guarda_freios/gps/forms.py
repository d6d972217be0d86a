from wtforms.validators import DataRequired, InputRequired, NumberRange, Optional

from guarda_freios.core.forms import FormularioAPI, NumeroField, TextoField


class PosicaoForm(FormularioAPI):
    tripulante_id = TextoField('Tripulante', validators=[DataRequired()])
    veiculo_id = TextoField('Veículo', validators=[DataRequired()])
    carreira_id = TextoField('Carreira', validators=[DataRequired()])
    latitude = NumeroField('Latitude', validators=[InputRequired(), NumberRange(min=-90, max=90)])
    longitude = NumeroField('Longitude', validators=[InputRequired(), NumberRange(min=-180, max=180)])
    precisao = NumeroField('Precisão', validators=[Optional()])
    velocidade = NumeroField('Velocidade', validators=[Optional()])


class PararGPSForm(FormularioAPI):
    tripulante_id = TextoField('Tripulante', validators=[DataRequired(message="tripulante_id é obrigatório")])
