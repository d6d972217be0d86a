"""
Módulo de Configuração (Blindado)

Define as classes de configuração da aplicação. Implementa o padrão 'Fail Fast':
se uma variável crítica estiver faltando, a aplicação nem inicia.
"""

import os
from dotenv import load_dotenv

# Carrega variáveis do arquivo .env
load_dotenv()


class Config:
    """
    Classe de configuração base da aplicação.
    """

    # === SEGURANÇA CRÍTICA (Fail Fast) ===
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError("ERRO CRÍTICO: 'SECRET_KEY' não encontrada no .env. A aplicação não pode iniciar insegura.")

    # Validade do token de acesso emitido no login
    JWT_EXPIRACAO_HORAS = int(os.environ.get('JWT_EXPIRACAO_HORAS', 24))

    # === ARMAZENAMENTO ===
    # 'firestore' em produção, 'memory' para testes e desenvolvimento local
    STORAGE_BACKEND = os.environ.get('STORAGE_BACKEND', 'firestore').lower()

    GOOGLE_CLOUD_PROJECT = os.environ.get('GOOGLE_CLOUD_PROJECT')
    FIRESTORE_DATABASE = os.environ.get('FIRESTORE_DATABASE')

    if STORAGE_BACKEND == 'firestore' and not GOOGLE_CLOUD_PROJECT:
        print("AVISO: 'GOOGLE_CLOUD_PROJECT' não configurado. O cliente Firestore usará o projeto padrão das credenciais.")

    # Tentativas da transação do histórico de serviços em caso de contenção
    HISTORICO_MAX_TENTATIVAS = int(os.environ.get('HISTORICO_MAX_TENTATIVAS', 5))

    # === OPERAÇÃO ===
    # Intervalo (segundos) da limpeza de ordens expiradas. 0 desliga a tarefa.
    ORDENS_LIMPEZA_INTERVALO = int(os.environ.get('ORDENS_LIMPEZA_INTERVALO', 60))
    GPS_JANELA_MINUTOS = int(os.environ.get('GPS_JANELA_MINUTOS', 5))
    CHECKINS_JANELA_HORAS = int(os.environ.get('CHECKINS_JANELA_HORAS', 24))
    OBSERVACOES_RETENCAO_HORAS = int(os.environ.get('OBSERVACOES_RETENCAO_HORAS', 24))

    # === RATE LIMITING (Flask-Limiter) ===
    # Em produção, idealmente usar Redis. Para dev/demo, memória é ok.
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    RATELIMIT_ENABLED = True

    # === FLASK ===
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1')
    JSON_SORT_KEYS = False


class TestConfig(Config):
    """
    Configuração usada pela suíte de testes: armazenamento em memória,
    sem tarefa de limpeza em background e sem rate limiting.
    """
    TESTING = True
    STORAGE_BACKEND = 'memory'
    ORDENS_LIMPEZA_INTERVALO = 0
    RATELIMIT_ENABLED = False
