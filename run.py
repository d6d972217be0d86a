"""
Ponto de Entrada da Aplicação (Runner)

Este script importa a "Application Factory" (create_app) do pacote
'guarda_freios' e inicia o servidor de desenvolvimento do Flask.

Para executar o servidor:
(Com o ambiente virtual .venv ativo)
$ python run.py
"""

import os

from guarda_freios import create_app

# Cria a instância da aplicação usando a factory
app = create_app()

if __name__ == "__main__":
    # PORT é definida pelo Cloud Run / Railway; 5000 localmente
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=app.config['DEBUG'])
