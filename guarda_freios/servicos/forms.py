from wtforms import DateField
from wtforms.validators import DataRequired

from guarda_freios.core.forms import FormularioAPI, TextoField

OBRIGATORIO = "Campo obrigatório."


class ServicoForm(FormularioAPI):
    tripulante_id = TextoField('Tripulante', validators=[DataRequired(message=OBRIGATORIO)])
    numero_servico = TextoField('Número do serviço', validators=[DataRequired(message=OBRIGATORIO)])
    # 'data' colidiria com a propriedade Form.data; o campo JSON continua a ser 'data'
    data_servico = DateField('Data', name='data', format='%Y-%m-%d', validators=[DataRequired(message="Data obrigatória (AAAA-MM-DD).")])
    local_inicio = TextoField('Local de início', validators=[DataRequired(message=OBRIGATORIO)])
    local_fim = TextoField('Local de fim', validators=[DataRequired(message=OBRIGATORIO)])
    hora_inicio = TextoField('Hora de início', validators=[DataRequired(message=OBRIGATORIO)])
    hora_fim = TextoField('Hora de fim', validators=[DataRequired(message=OBRIGATORIO)])
    numero_chapa = TextoField('Chapa', validators=[DataRequired(message=OBRIGATORIO)])
    afetacao = TextoField('Afetação', validators=[DataRequired(message=OBRIGATORIO)])
