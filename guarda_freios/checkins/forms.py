from wtforms.validators import DataRequired, NumberRange, Optional

from guarda_freios.core.forms import FormularioAPI, NumeroField, TextoField


class CheckInForm(FormularioAPI):
    tripulante_id = TextoField('Tripulante', validators=[DataRequired()])
    local = TextoField('Local', validators=[DataRequired()])
    servico_id = TextoField('Serviço', validators=[Optional()])
    veiculo_id = TextoField('Veículo', validators=[Optional()])
    carreira_id = TextoField('Carreira', validators=[Optional()])
    latitude = NumeroField('Latitude', validators=[Optional(), NumberRange(min=-90, max=90)])
    longitude = NumeroField('Longitude', validators=[Optional(), NumberRange(min=-180, max=180)])
    tipo = TextoField('Tipo', validators=[Optional()])
