"""Pedidos persistidos em `orders.json` (lista de objetos com `id`)."""
import logging
from pathlib import Path
from typing import Any, Dict, List

from .storage import JsonFileStore, next_id, with_id

logger = logging.getLogger(__name__)


class OrderBook:
    def __init__(self, path: str | Path) -> None:
        self.store = JsonFileStore(path, default=list, expected_type=list)

    @property
    def path(self) -> Path:
        return self.store.path

    def list_orders(self) -> List[Dict[str, Any]]:
        return self.store.load()

    def create_order(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Acrescenta um pedido com o próximo id livre e o retorna."""
        with self.store.transaction() as tx:
            order = with_id(next_id(tx.data), fields)
            tx.data.append(order)
            tx.mark_dirty()
        logger.info("Pedido %s criado.", order["id"])
        return order

    def delete_order(self, order_id: int) -> bool:
        """Remove o primeiro pedido com o id; os demais mantêm seus ids."""
        with self.store.transaction() as tx:
            for index, order in enumerate(tx.data):
                if isinstance(order, dict) and order.get("id") == order_id:
                    del tx.data[index]
                    tx.mark_dirty()
                    break
            else:
                return False
        logger.info("Pedido %s removido.", order_id)
        return True
