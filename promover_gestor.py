"""
Script Utilitário: promover_gestor.py
Use este script para promover um tripulante a Gestor manualmente.
"""

from guarda_freios import create_app
from guarda_freios.auth.services import obter_utilizador, promover_a_gestor

# Inicializa a aplicação para carregar configurações e banco de dados
app = create_app()


def promover_utilizador(numero):
    print(f"--- Promovendo utilizador: {numero} ---")

    # Precisamos do contexto da aplicação para acessar o Firestore corretamente
    with app.app_context():
        if obter_utilizador(numero) is None:
            print(f"❌ ERRO: O utilizador '{numero}' não foi encontrado no banco de dados.")
            print("DICA: Registe a conta em /api/auth/register antes de a promover.")
            return

        promover_a_gestor(numero)

        print(f"✅ SUCESSO! O utilizador '{numero}' agora é GESTOR.")
        print("⚠️  IMPORTANTE: O cargo vai no token, por isso é preciso fazer login novamente.")


if __name__ == "__main__":
    numero_alvo = input("Digite o número do funcionário que será Gestor: ").strip()
    promover_utilizador(numero_alvo)
