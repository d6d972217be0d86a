"""
Constantes Globais do Sistema.
Fonte Única da Verdade (Single Source of Truth) para coleções, cargos e regras.
"""

# === COLEÇÕES ===
COLECAO_UTILIZADORES = 'utilizadores'
COLECAO_SERVICOS = 'servicos'
COLECAO_HISTORICO = 'servicos_historico'
COLECAO_GPS = 'gps_posicoes'
COLECAO_CHECKINS = 'check_ins'
COLECAO_OBSERVACOES = 'observacoes'
COLECAO_ORDENS = 'ordens_servico'
COLECAO_AVARIAS = 'avarias'

# === CARGOS ===
CARGO_TRIPULANTE = 'Tripulante'
CARGO_GESTOR = 'Gestor'
CARGOS = (CARGO_TRIPULANTE, CARGO_GESTOR)

# === HISTÓRICO DE SERVIÇOS (Auto-preenchimento) ===
# Campos comparados e sugeridos pelo histórico
CAMPOS_HISTORICO = (
    'local_inicio',
    'local_fim',
    'hora_inicio',
    'hora_fim',
    'numero_chapa',
    'afetacao',
)

# Repetições necessárias para sugerir o auto-preenchimento
AUTO_PREENCHIMENTO_MINIMO = 5

# Contagem guardada (antes do incremento) a partir da qual as edições contam
EDICOES_CONTAGEM_MINIMA = 3

# === SERVIÇOS ===
ESTADO_SERVICO_AGENDADO = 'Agendado'

# === CHECK-INS ===
TIPO_CHECKIN_PADRAO = 'Rendição'
TIPO_OBSERVACAO_CHECKIN = 'Check-in'
CHECKINS_LIMITE = 50
OBSERVACOES_LIMITE = 50

# === AVARIAS ===
GRAVIDADES_AVARIA = ('Baixa', 'Média', 'Alta')
ESTADO_AVARIA_ABERTA = 'Aberta'
ESTADO_AVARIA_RESOLVIDA = 'Resolvida'

# === AUTENTICAÇÃO ===
PASSWORD_TAMANHO_MINIMO = 6
