"""
Módulo de Conexão com o Banco de Dados (Core)

Expõe uma interface única de coleção usada pelos "Service Layers" da
aplicação, com dois backends intercambiáveis:

- Firestore (produção): cliente criado sob demanda, escritas atómicas via
  transações do próprio Firestore.
- Memória (testes e desenvolvimento): dicionários por aplicação, protegidos
  por um lock reentrante.

O backend é escolhido por STORAGE_BACKEND (config.py).
"""

import copy
import operator
import threading
import uuid
from functools import wraps
from typing import Any, Callable, Iterable, List, Optional, Tuple

from flask import current_app
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as auth_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .errors import StorageError
from .logger import get_logger

logger = get_logger(__name__)

Filtro = Tuple[str, str, Any]

_OPERADORES = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
    'in': lambda valor, opcoes: valor in opcoes,
}

# Limite de escritas por batch do Firestore
_BATCH_MAXIMO = 500

_firestore_client = None
_client_lock = threading.Lock()


def _traduzir_erros(func):
    """Converte falhas do driver Google em StorageError."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (google_exceptions.GoogleAPIError, auth_exceptions.GoogleAuthError) as e:
            logger.error(f"Falha no Firestore em {func.__name__}: {e}", exc_info=True)
            raise StorageError() from e
    return wrapper


def _get_firestore_client() -> firestore.Client:
    global _firestore_client
    with _client_lock:
        if _firestore_client is None:
            try:
                _firestore_client = firestore.Client(
                    project=current_app.config.get('GOOGLE_CLOUD_PROJECT'),
                    database=current_app.config.get('FIRESTORE_DATABASE') or None,
                )
                logger.info("Conexão com o Firestore estabelecida com sucesso.")
            except auth_exceptions.GoogleAuthError as e:
                logger.critical(f"ERRO AO CONECTAR COM O FIRESTORE: {e}")
                raise StorageError() from e
    return _firestore_client


class ColecaoFirestore:
    """Coleção apoiada numa collection do Firestore."""

    def __init__(self, client: firestore.Client, nome: str):
        self.nome = nome
        self._client = client
        self._ref = client.collection(nome)

    @staticmethod
    def _para_dict(snapshot) -> dict:
        dados = snapshot.to_dict()
        dados['id'] = snapshot.id
        return dados

    def _query(self, filtros: Iterable[Filtro] = ()):
        query = self._ref
        for campo, op, valor in filtros:
            query = query.where(filter=FieldFilter(campo, op, valor))
        return query

    @_traduzir_erros
    def obter(self, doc_id: str) -> Optional[dict]:
        snapshot = self._ref.document(doc_id).get()
        if not snapshot.exists:
            return None
        return self._para_dict(snapshot)

    @_traduzir_erros
    def adicionar(self, dados: dict) -> dict:
        _, doc_ref = self._ref.add(dados)
        return {**dados, 'id': doc_ref.id}

    @_traduzir_erros
    def definir(self, doc_id: str, dados: dict) -> dict:
        self._ref.document(doc_id).set(dados)
        return {**dados, 'id': doc_id}

    @_traduzir_erros
    def criar(self, doc_id: str, dados: dict) -> Optional[dict]:
        """Cria o documento apenas se ainda não existir. Devolve None se já existir."""
        try:
            self._ref.document(doc_id).create(dados)
        except google_exceptions.AlreadyExists:
            return None
        return {**dados, 'id': doc_id}

    @_traduzir_erros
    def atualizar(self, doc_id: str, campos: dict) -> bool:
        try:
            self._ref.document(doc_id).update(campos)
        except google_exceptions.NotFound:
            return False
        return True

    @_traduzir_erros
    def excluir(self, doc_id: str) -> None:
        self._ref.document(doc_id).delete()

    @_traduzir_erros
    def consultar(self, filtros: Iterable[Filtro] = (), ordenar_por: Optional[str] = None,
                  descendente: bool = False, limite: Optional[int] = None) -> List[dict]:
        query = self._query(filtros)
        if ordenar_por:
            direcao = firestore.Query.DESCENDING if descendente else firestore.Query.ASCENDING
            query = query.order_by(ordenar_por, direction=direcao)
        if limite:
            query = query.limit(limite)
        return [self._para_dict(doc) for doc in query.stream()]

    def _em_batches(self, filtros: Iterable[Filtro], aplicar: Callable) -> int:
        total = 0
        batch = self._client.batch()
        pendentes = 0
        for snapshot in self._query(filtros).stream():
            aplicar(batch, snapshot.reference)
            pendentes += 1
            total += 1
            if pendentes == _BATCH_MAXIMO:
                batch.commit()
                batch = self._client.batch()
                pendentes = 0
        if pendentes:
            batch.commit()
        return total

    @_traduzir_erros
    def atualizar_onde(self, filtros: Iterable[Filtro], campos: dict) -> int:
        return self._em_batches(filtros, lambda batch, ref: batch.update(ref, campos))

    @_traduzir_erros
    def excluir_onde(self, filtros: Iterable[Filtro]) -> int:
        return self._em_batches(filtros, lambda batch, ref: batch.delete(ref))

    @_traduzir_erros
    def transacao(self, doc_id: str, calcular: Callable[[Optional[dict]], dict]) -> dict:
        """
        Lê o documento, calcula o novo estado e grava-o numa única transação.
        O Firestore repete a função em caso de contenção até
        HISTORICO_MAX_TENTATIVAS vezes.
        """
        doc_ref = self._ref.document(doc_id)

        @firestore.transactional
        def _executar(transaction):
            snapshot = doc_ref.get(transaction=transaction)
            atual = snapshot.to_dict() if snapshot.exists else None
            novo = calcular(atual)
            transaction.set(doc_ref, novo)
            return novo

        tentativas = current_app.config.get('HISTORICO_MAX_TENTATIVAS', 5)
        novo = _executar(self._client.transaction(max_attempts=tentativas))
        return {**novo, 'id': doc_id}


class MemoriaStore:
    """Armazenamento em memória de uma aplicação: {coleção: {id: documento}}."""

    def __init__(self):
        self.lock = threading.RLock()
        self.colecoes = {}

    def documentos(self, nome: str) -> dict:
        return self.colecoes.setdefault(nome, {})


class ColecaoMemoria:
    """Coleção em memória com a mesma interface de ColecaoFirestore."""

    def __init__(self, store: MemoriaStore, nome: str):
        self.nome = nome
        self._store = store

    @property
    def _docs(self) -> dict:
        return self._store.documentos(self.nome)

    @staticmethod
    def _copia(doc_id: str, dados: dict) -> dict:
        copia = copy.deepcopy(dados)
        copia['id'] = doc_id
        return copia

    @staticmethod
    def _corresponde(dados: dict, filtros: Iterable[Filtro]) -> bool:
        for campo, op, valor in filtros:
            # Como no Firestore, documentos sem o campo não entram no resultado
            if campo not in dados:
                return False
            try:
                if not _OPERADORES[op](dados[campo], valor):
                    return False
            except TypeError:
                return False
        return True

    def obter(self, doc_id: str) -> Optional[dict]:
        with self._store.lock:
            dados = self._docs.get(doc_id)
            return self._copia(doc_id, dados) if dados is not None else None

    def adicionar(self, dados: dict) -> dict:
        return self.definir(uuid.uuid4().hex, dados)

    def definir(self, doc_id: str, dados: dict) -> dict:
        with self._store.lock:
            self._docs[doc_id] = copy.deepcopy(dados)
            return self._copia(doc_id, dados)

    def criar(self, doc_id: str, dados: dict) -> Optional[dict]:
        with self._store.lock:
            if doc_id in self._docs:
                return None
            return self.definir(doc_id, dados)

    def atualizar(self, doc_id: str, campos: dict) -> bool:
        with self._store.lock:
            if doc_id not in self._docs:
                return False
            self._docs[doc_id].update(copy.deepcopy(campos))
            return True

    def excluir(self, doc_id: str) -> None:
        with self._store.lock:
            self._docs.pop(doc_id, None)

    def consultar(self, filtros: Iterable[Filtro] = (), ordenar_por: Optional[str] = None,
                  descendente: bool = False, limite: Optional[int] = None) -> List[dict]:
        filtros = list(filtros)
        with self._store.lock:
            resultado = [
                self._copia(doc_id, dados)
                for doc_id, dados in self._docs.items()
                if self._corresponde(dados, filtros)
            ]
        if ordenar_por:
            resultado = [doc for doc in resultado if ordenar_por in doc]
            resultado.sort(key=lambda doc: doc[ordenar_por], reverse=descendente)
        if limite:
            resultado = resultado[:limite]
        return resultado

    def atualizar_onde(self, filtros: Iterable[Filtro], campos: dict) -> int:
        filtros = list(filtros)
        with self._store.lock:
            alvos = [doc_id for doc_id, dados in self._docs.items() if self._corresponde(dados, filtros)]
            for doc_id in alvos:
                self._docs[doc_id].update(copy.deepcopy(campos))
        return len(alvos)

    def excluir_onde(self, filtros: Iterable[Filtro]) -> int:
        filtros = list(filtros)
        with self._store.lock:
            alvos = [doc_id for doc_id, dados in self._docs.items() if self._corresponde(dados, filtros)]
            for doc_id in alvos:
                del self._docs[doc_id]
        return len(alvos)

    def transacao(self, doc_id: str, calcular: Callable[[Optional[dict]], dict]) -> dict:
        # O lock cobre leitura, cálculo e escrita
        with self._store.lock:
            atual = self._docs.get(doc_id)
            novo = calcular(copy.deepcopy(atual) if atual is not None else None)
            self._docs[doc_id] = copy.deepcopy(novo)
            return self._copia(doc_id, novo)


def init_app(app) -> None:
    """Prepara o backend configurado para a aplicação."""
    backend = app.config.get('STORAGE_BACKEND', 'firestore')
    if backend == 'memory':
        app.extensions['guarda_freios.memoria'] = MemoriaStore()
    elif backend != 'firestore':
        raise ValueError(f"STORAGE_BACKEND inválido: '{backend}' (use 'firestore' ou 'memory').")
    logger.info(f"Backend de armazenamento: {backend}")


def get_colecao(nome: str):
    """
    Devolve a coleção 'nome' no backend da aplicação atual.
    """
    if current_app.config.get('STORAGE_BACKEND') == 'memory':
        return ColecaoMemoria(current_app.extensions['guarda_freios.memoria'], nome)
    return ColecaoFirestore(_get_firestore_client(), nome)
