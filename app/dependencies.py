"""Provedores dos stores usados pelas rotas (injeção via `Depends`).

Os caminhos vêm do ambiente (ou `.env`):
- `DATA_DIR`: diretório dos arquivos (padrão: `data/` na raiz do projeto);
- `PRODUCTS_FILE` / `ORDERS_FILE`: nomes dos arquivos.

Uma única instância por store garante um único lock por arquivo no processo.
"""

import os
from functools import lru_cache
from pathlib import Path

from .orders import OrderBook
from .products import ProductCatalog

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def data_dir() -> Path:
    return Path(os.getenv("DATA_DIR") or DEFAULT_DATA_DIR)


@lru_cache(maxsize=1)
def get_catalog() -> ProductCatalog:
    return ProductCatalog(data_dir() / os.getenv("PRODUCTS_FILE", "data.json"))


@lru_cache(maxsize=1)
def get_order_book() -> OrderBook:
    return OrderBook(data_dir() / os.getenv("ORDERS_FILE", "orders.json"))
