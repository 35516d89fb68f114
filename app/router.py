"""Rotas HTTP do catálogo de produtos e dos pedidos."""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from pydantic import BaseModel

from .dependencies import get_catalog, get_order_book
from .orders import OrderBook
from .products import ProductCatalog

router = APIRouter()


class PriceUpdateRequest(BaseModel):
    """Payload do PUT de preço; `newPrice` é obrigatório, de qualquer tipo."""

    newPrice: Any


class MessageResponse(BaseModel):
    message: str


def parse_product_id(raw: str | None) -> int:
    """Valida o `id` da query: inteiro diferente de zero, senão 400."""
    try:
        product_id = int(raw) if raw is not None else 0
    except ValueError:
        product_id = 0
    if product_id == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or missing product ID",
        )
    return product_id


@router.get("/search")
def search_products(catalog: ProductCatalog = Depends(get_catalog)) -> List[Any]:
    """Lista todos os produtos (não há filtro, apesar do nome da rota)."""
    return catalog.list_products()


@router.post("/products", status_code=status.HTTP_201_CREATED)
def create_product(
    fields: Dict[str, Any] = Body(...),
    catalog: ProductCatalog = Depends(get_catalog),
) -> Dict[str, Any]:
    return catalog.create_product(fields)


@router.put("/products/update-price")
def update_product_price(
    req: PriceUpdateRequest,
    product_id: str | None = Query(default=None, alias="id"),
    catalog: ProductCatalog = Depends(get_catalog),
) -> Dict[str, Any]:
    product = catalog.update_price(parse_product_id(product_id), req.newPrice)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.delete("/products/delete", response_model=MessageResponse)
def delete_product(
    product_id: str | None = Query(default=None, alias="id"),
    catalog: ProductCatalog = Depends(get_catalog),
) -> MessageResponse:
    if not catalog.delete_product(parse_product_id(product_id)):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return MessageResponse(message="Product deleted successfully")


@router.post("/order", status_code=status.HTTP_201_CREATED)
def create_order(
    fields: Dict[str, Any] = Body(...),
    orders: OrderBook = Depends(get_order_book),
) -> Dict[str, Any]:
    return orders.create_order(fields)


@router.get("/status")
def list_orders(orders: OrderBook = Depends(get_order_book)) -> List[Any]:
    return orders.list_orders()


@router.delete("/order/{order_id}", response_model=MessageResponse)
def delete_order(
    order_id: str,
    orders: OrderBook = Depends(get_order_book),
) -> MessageResponse:
    """Remove um pedido; id não numérico não casa com nenhum pedido (404)."""
    try:
        parsed_id = int(order_id)
    except ValueError:
        parsed_id = None
    if parsed_id is None or not orders.delete_order(parsed_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    return MessageResponse(message="Order deleted successfully")
