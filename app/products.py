"""Catálogo de produtos persistido em `data.json`.

Formato canônico do arquivo: `{"products": [{"id": 1, ...}, ...]}`.
Arquivos antigos, em que `products` é um mapa `{"1": {...}}`, são
normalizados na leitura e regravados no formato canônico na próxima escrita.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Set

from .storage import JsonFileStore, StoreCorruptError, next_id, with_id

logger = logging.getLogger(__name__)


def _empty_catalog() -> Dict[str, Any]:
    return {"products": []}


def normalize_products(raw: Any) -> List[Dict[str, Any]]:
    """Converte `products` (lista ou mapa legado) para a lista canônica."""
    if raw is None:
        return []
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, dict):
        raise TypeError(f"products deveria ser lista ou objeto, não {type(raw).__name__}")

    products: List[Dict[str, Any]] = []
    pending: List[Dict[str, Any]] = []
    used: Set[int] = set()
    for key, value in raw.items():
        fields = value if isinstance(value, dict) else {"value": value}
        own_id = fields.get("id")
        if isinstance(own_id, int) and not isinstance(own_id, bool) and own_id not in used:
            products.append(dict(fields))
            used.add(own_id)
        elif key.isdecimal() and int(key) not in used:
            products.append(with_id(int(key), fields))
            used.add(int(key))
        else:
            # id já tomado por outra entrada: recebe um novo no fim
            pending.append(fields)
    for fields in pending:
        products.append(with_id(next_id(products), fields))
    return products


class ProductCatalog:
    """Operações de produto sobre um `JsonFileStore`."""

    def __init__(self, path: str | Path) -> None:
        self.store = JsonFileStore(path, default=_empty_catalog, expected_type=dict)

    @property
    def path(self) -> Path:
        return self.store.path

    def _products(self, data: Dict[str, Any]) -> List[Dict[str, Any]]:
        try:
            products = normalize_products(data.get("products"))
        except TypeError as exc:
            raise StoreCorruptError(self.store.path, str(exc)) from exc
        data["products"] = products
        return products

    def list_products(self) -> List[Dict[str, Any]]:
        """Retorna todos os produtos, na ordem do arquivo."""
        return self._products(self.store.load())

    def create_product(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Adiciona um produto com o próximo id livre e o retorna."""
        with self.store.transaction() as tx:
            products = self._products(tx.data)
            product = with_id(next_id(products), fields)
            products.append(product)
            tx.mark_dirty()
        logger.info("Produto %s criado.", product["id"])
        return product

    def update_price(self, product_id: int, new_price: Any) -> Dict[str, Any] | None:
        """Altera `price` do produto; retorna o produto ou None se não existir."""
        with self.store.transaction() as tx:
            for product in self._products(tx.data):
                if isinstance(product, dict) and product.get("id") == product_id:
                    product["price"] = new_price
                    tx.mark_dirty()
                    break
            else:
                return None
        logger.info("Preço do produto %s atualizado.", product_id)
        return product

    def delete_product(self, product_id: int) -> bool:
        """Remove o produto; retorna False se ele não existir."""
        with self.store.transaction() as tx:
            products = self._products(tx.data)
            for index, product in enumerate(products):
                if isinstance(product, dict) and product.get("id") == product_id:
                    del products[index]
                    tx.mark_dirty()
                    break
            else:
                return False
        logger.info("Produto %s removido.", product_id)
        return True

    def import_products(
        self, items: List[Dict[str, Any]], replace: bool = False
    ) -> List[Dict[str, Any]]:
        """Importa vários produtos de uma vez, atribuindo ids novos."""
        with self.store.transaction() as tx:
            products = [] if replace else self._products(tx.data)
            added = []
            for fields in items:
                product = with_id(next_id(products), fields)
                products.append(product)
                added.append(product)
            tx.data["products"] = products
            tx.mark_dirty()
        logger.info("%d produtos importados para %s.", len(added), self.store.path)
        return added
