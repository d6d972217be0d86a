"""
Tarefas de Manutenção em Background

Uma thread daemon que, a cada ORDENS_LIMPEZA_INTERVALO segundos, desativa
as ordens de serviço expiradas e apaga as observações antigas.
"""

import threading

from .logger import get_logger

logger = get_logger(__name__)


def executar_limpeza(app) -> dict:
    """
    Executa um ciclo de limpeza dentro do contexto da aplicação.
    """
    from guarda_freios.checkins.services import limpar_observacoes_antigas
    from guarda_freios.ordens.services import expirar_ordens

    with app.app_context():
        return {
            'ordens_expiradas': expirar_ordens(),
            'observacoes_removidas': limpar_observacoes_antigas(),
        }


def _loop_limpeza(app, intervalo: int, parar: threading.Event) -> None:
    logger.info(f"[BG] Limpeza periódica iniciada (a cada {intervalo}s)")
    while not parar.wait(intervalo):
        try:
            executar_limpeza(app)
        except Exception as e:
            # Um ciclo falhado não pode matar a thread; o próximo tenta de novo
            logger.error(f"[BG] Erro na limpeza periódica: {e}", exc_info=True)


def iniciar_limpeza_periodica(app):
    """
    Arranca a thread de limpeza. Devolve o Event que a termina, ou None se
    a tarefa estiver desligada (intervalo 0).
    """
    intervalo = app.config.get('ORDENS_LIMPEZA_INTERVALO', 0)
    if not intervalo or intervalo <= 0:
        return None

    parar = threading.Event()
    thread = threading.Thread(
        target=_loop_limpeza,
        args=(app, intervalo, parar),
        name='guarda-freios-limpeza',
        daemon=True,
    )
    thread.start()
    app.extensions['guarda_freios.limpeza'] = parar
    return parar
