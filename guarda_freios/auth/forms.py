from wtforms import PasswordField
from wtforms.validators import DataRequired, Length, Regexp

from guarda_freios.core.constants import PASSWORD_TAMANHO_MINIMO
from guarda_freios.core.forms import FormularioAPI, TextoField

MENSAGEM_PASSWORD_CURTA = f"A password deve ter pelo menos {PASSWORD_TAMANHO_MINIMO} caracteres"


class LoginForm(FormularioAPI):
    numero = TextoField('Número', validators=[DataRequired(message="Número é obrigatório")])
    password = PasswordField('Password', validators=[DataRequired(message="Password é obrigatória")])


class RegistoForm(FormularioAPI):
    numero = TextoField('Número', validators=[
        DataRequired(message="Número é obrigatório"),
        Regexp(r'^[A-Za-z0-9]+$', message="Número deve conter apenas letras e algarismos")
    ])
    nome = TextoField('Nome', validators=[
        DataRequired(message="Nome é obrigatório"),
        Length(min=3, max=100, message="Nome deve ter entre 3 e 100 caracteres")
    ])
    email = TextoField('Email', validators=[
        DataRequired(message="Email é obrigatório"),
        Regexp(r'^[^@\s]+@[^@\s]+\.[^@\s]+$', message="Email inválido")
    ])
    password = PasswordField('Password', validators=[
        DataRequired(message="Password é obrigatória"),
        Length(min=PASSWORD_TAMANHO_MINIMO, message=MENSAGEM_PASSWORD_CURTA)
    ])


class AlterarPasswordForm(FormularioAPI):
    numero = TextoField('Número', validators=[DataRequired(message="Número é obrigatório")])
    currentPassword = PasswordField('Password atual', validators=[DataRequired(message="Password atual é obrigatória")])
    newPassword = PasswordField('Nova password', validators=[
        DataRequired(message="Nova password é obrigatória"),
        Length(min=PASSWORD_TAMANHO_MINIMO, message=MENSAGEM_PASSWORD_CURTA)
    ])
