"""Script de ingestão: importa produtos de um JSON para o catálogo (`data.json`).

Aceita como fonte uma lista de produtos, um objeto `{"products": ...}` ou o mapa
legado `{"1": {...}}`. Sem fonte, apenas regrava o catálogo no formato canônico.

Uso:
    python -m app.ingest fonte.json [--replace]
"""

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv

from .dependencies import get_catalog
from .products import normalize_products


def load_source(path: Path) -> List[Dict[str, Any]]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "products" in data:
        data = data["products"]
    # ids da fonte são descartados; o catálogo atribui os seus
    return [
        {k: v for k, v in item.items() if k != "id"}
        for item in normalize_products(data)
        if isinstance(item, dict)
    ]


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("source", nargs="?", type=Path, help="arquivo JSON de produtos")
    parser.add_argument(
        "--replace", action="store_true", help="substitui o catálogo em vez de acrescentar"
    )
    args = parser.parse_args(argv)

    load_dotenv()
    catalog = get_catalog()
    items = load_source(args.source) if args.source else []
    added = catalog.import_products(items, replace=args.replace)
    print(f"{len(added)} produtos importados em {catalog.path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
