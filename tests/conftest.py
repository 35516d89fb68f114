"""Fixtures: stores em diretório temporário injetados via dependency_overrides."""
import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_catalog, get_order_book
from app.main import app
from app.orders import OrderBook
from app.products import ProductCatalog


@pytest.fixture
def catalog(tmp_path):
    return ProductCatalog(tmp_path / "data.json")


@pytest.fixture
def order_book(tmp_path):
    return OrderBook(tmp_path / "orders.json")


@pytest.fixture
def client(catalog, order_book):
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_order_book] = lambda: order_book
    yield TestClient(app)
    app.dependency_overrides.clear()
