"""Testes das rotas de pedido (/order, /status, /order/{id})."""
import json


def read_orders(tmp_path):
    return json.loads((tmp_path / "orders.json").read_text(encoding="utf-8"))


def test_create_order_without_file(client, tmp_path):
    resp = client.post("/order", json={"product": 1, "quantity": 2})
    assert resp.status_code == 201
    assert resp.json() == {"id": 1, "product": 1, "quantity": 2}
    assert read_orders(tmp_path) == [{"id": 1, "product": 1, "quantity": 2}]


def test_status_without_file_returns_empty_list(client):
    resp = client.get("/status")
    assert resp.status_code == 200
    assert resp.json() == []


def test_status_lists_created_orders(client):
    created = [client.post("/order", json={"item": n}).json() for n in "abc"]
    resp = client.get("/status")
    assert resp.json() == created
    assert resp.json() == client.get("/status").json()


def test_delete_order_keeps_other_ids(client, tmp_path):
    for n in range(3):
        client.post("/order", json={"n": n})
    resp = client.delete("/order/2")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Order deleted successfully"}
    assert [o["id"] for o in read_orders(tmp_path)] == [1, 3]


def test_delete_unknown_order_is_404_and_file_unchanged(client, tmp_path):
    client.post("/order", json={"n": 1})
    before = (tmp_path / "orders.json").read_text(encoding="utf-8")
    resp = client.delete("/order/42")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Order not found"}
    assert (tmp_path / "orders.json").read_text(encoding="utf-8") == before


def test_delete_non_numeric_order_is_404(client):
    client.post("/order", json={"n": 1})
    assert client.delete("/order/abc").status_code == 404


def test_new_order_after_delete_gets_fresh_id(client, tmp_path):
    client.post("/order", json={"n": 1})
    client.post("/order", json={"n": 2})
    client.delete("/order/1")
    resp = client.post("/order", json={"n": 3})
    assert resp.json()["id"] == 3
    assert [o["id"] for o in read_orders(tmp_path)] == [2, 3]


def test_corrupt_orders_file_is_500(client, tmp_path):
    (tmp_path / "orders.json").write_text('{"not": "a list"}', encoding="utf-8")
    assert client.get("/status").status_code == 500
    assert client.post("/order", json={"n": 1}).status_code == 500
    assert client.delete("/order/1").json() == {"error": "Internal Server Error"}


def test_delete_partially_numeric_order_id_is_404(client, tmp_path):
    client.post("/order", json={"n": 1})
    client.post("/order", json={"n": 2})
    assert client.delete("/order/2abc").status_code == 404
    assert [o["id"] for o in read_orders(tmp_path)] == [1, 2]
