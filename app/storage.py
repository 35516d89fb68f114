"""Persistência em arquivos JSON locais.

Cada `JsonFileStore` representa um arquivo (ex.: `data.json`, `orders.json`):
- é relido do disco a cada operação (sem cache entre requisições);
- grava o conteúdo inteiro com indentação de 2 espaços, via arquivo temporário
  + `os.replace`, para que uma queda no meio da escrita não corrompa o arquivo;
- serializa leituras e ciclos ler-modificar-gravar com um lock próprio.
"""

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Erro base da camada de persistência."""


class StoreCorruptError(StoreError):
    """O arquivo existe, mas não contém JSON válido com o formato esperado."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


def next_id(items: Iterable[Dict[str, Any]]) -> int:
    """Próximo id livre: maior id inteiro existente + 1 (ou 1 se vazio)."""
    ids = [
        item["id"]
        for item in items
        if isinstance(item, dict)
        and isinstance(item.get("id"), int)
        and not isinstance(item.get("id"), bool)
    ]
    return max(ids, default=0) + 1


def with_id(item_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Monta `{id, ...campos}`; o id atribuído prevalece sobre o do cliente."""
    entry: Dict[str, Any] = {"id": item_id}
    entry.update({k: v for k, v in fields.items() if k != "id"})
    return entry


class JsonFileStore:
    """Um arquivo JSON tratado como estado persistido do processo."""

    def __init__(
        self,
        path: str | Path,
        default: Callable[[], Any],
        expected_type: type = object,
    ) -> None:
        self.path = Path(path)
        self._default = default
        self._expected_type = expected_type
        self._lock = threading.Lock()

    def _read(self) -> Any:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            logger.debug("Arquivo %s ainda não existe; usando padrão.", self.path)
            return self._default()
        except UnicodeDecodeError as exc:
            raise StoreCorruptError(self.path, f"não é UTF-8 válido ({exc})") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreCorruptError(self.path, f"JSON inválido ({exc})") from exc
        if not isinstance(data, self._expected_type):
            raise StoreCorruptError(
                self.path,
                f"esperado {self._expected_type.__name__}, "
                f"encontrado {type(data).__name__}",
            )
        return data

    def _write(self, data: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        logger.debug("Arquivo %s gravado.", self.path)

    def load(self) -> Any:
        """Lê e retorna o conteúdo atual do arquivo."""
        with self._lock:
            return self._read()

    @contextmanager
    def transaction(self) -> Iterator["Transaction"]:
        """Ciclo ler-modificar-gravar sob o lock do store.

        O bloco recebe uma `Transaction` com os dados lidos e pode alterá-los
        no lugar. Os dados só são gravados se o bloco chamar `mark_dirty()` e
        sair sem exceção; caso contrário o arquivo fica intocado.
        """
        with self._lock:
            tx = Transaction(self._read())
            yield tx
            if tx.dirty:
                self._write(tx.data)


class Transaction:
    """Dados de uma transação; só é gravada se marcada com `mark_dirty()`."""

    def __init__(self, data: Any) -> None:
        self.data = data
        self.dirty = False

    def mark_dirty(self) -> None:
        self.dirty = True
