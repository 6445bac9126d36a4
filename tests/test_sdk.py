# tests/test_sdk.py
import pytest
from rich.console import Console

from cli import build_products_table, is_low_stock
from sdk.pyinventory import InventoryClient, InventoryAPIError


@pytest.fixture
def sdk(client):
    return InventoryClient(base_url=str(client.base_url), session=client)

def test_sdk_round_trip(sdk):
    created = sdk.add_product("Widget", "9.99", 10, "Hardware")
    assert created["id"] == 1
    assert created["lowStockThreshold"] == 5

    updated = sdk.update_stock(created["id"], 3)
    assert updated["stock"] == 3
    assert sdk.get_product(1) == updated
    assert sdk.list_products() == [updated]
    assert sdk.low_stock() == [updated]
    assert sdk.health()["status"] == "ok"

def test_sdk_raises_api_errors(sdk):
    with pytest.raises(InventoryAPIError) as exc:
        sdk.update_stock(99, 1)
    assert exc.value.status_code == 404
    assert exc.value.message == "Product not found."

    with pytest.raises(InventoryAPIError) as exc:
        sdk.add_product("", 1, 1, "x")
    assert exc.value.status_code == 400

def test_cli_table_marks_low_stock():
    products = [
        {"id": 1, "name": "Widget", "price": 9.99, "stock": 3, "lowStockThreshold": 5, "category": "Hardware"},
        {"id": 2, "name": "Gadget", "price": 24.5, "stock": 40, "lowStockThreshold": 5, "category": "Hardware"},
    ]
    assert is_low_stock(products[0])
    assert not is_low_stock(products[1])

    console = Console(record=True, width=120)
    console.print(build_products_table(products))
    text = console.export_text()
    assert "Widget" in text
    assert "$24.50" in text
