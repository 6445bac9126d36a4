# sdk/pyinventory.py
import requests
import httpx
from typing import Any, Optional


class InventoryAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _check(r) -> Any:
    # Works for requests and httpx responses alike
    if r.status_code >= 400:
        try:
            message = r.json().get("error", r.text)
        except ValueError:
            message = r.text
        raise InventoryAPIError(r.status_code, message)
    return r.json()


class InventoryClient:
    def __init__(self, base_url: str = "http://localhost:3001", timeout: int = 10, session: Optional[Any] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Any requests-compatible session works (FastAPI's TestClient included)
        self.session = session if session is not None else requests.Session()

    def health(self):
        r = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        return _check(r)

    # Products
    def list_products(self):
        r = self.session.get(f"{self.base_url}/products", timeout=self.timeout)
        return _check(r)

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return _check(r)

    def low_stock(self):
        r = self.session.get(f"{self.base_url}/products/low-stock", timeout=self.timeout)
        return _check(r)

    def add_product(self, name: str, price: float, stock: int, category: str, low_stock_threshold: Optional[int] = None):
        payload = {"name": name, "price": price, "stock": stock, "category": category}
        if low_stock_threshold is not None:
            payload["lowStockThreshold"] = low_stock_threshold
        r = self.session.post(f"{self.base_url}/add-product", json=payload, timeout=self.timeout)
        return _check(r)

    # Stock
    def update_stock(self, product_id: int, new_quantity: int):
        r = self.session.post(f"{self.base_url}/update-stock", json={
            "id": product_id, "newQuantity": new_quantity
        }, timeout=self.timeout)
        return _check(r)

    async def update_stock_async(self, product_id: int, new_quantity: int):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(f"{self.base_url}/update-stock", json={"id": product_id, "newQuantity": new_quantity})
            return _check(r)


if __name__ == "__main__":
    import argparse
    import os
    from rich import print

    parser = argparse.ArgumentParser(description="PyInventory CLI")
    parser.add_argument("--url", default=os.environ.get("INVENTORY_API_URL", "http://127.0.0.1:3001"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")
    subparsers.add_parser("low-stock", help="List products at or below their low-stock threshold")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    ap = subparsers.add_parser("add-product", help="Register a new product")
    ap.add_argument("--name", required=True, help="Product name")
    ap.add_argument("--price", type=float, required=True, help="Unit price")
    ap.add_argument("--stock", type=int, required=True, help="Units in stock")
    ap.add_argument("--category", required=True, help="Product category")
    ap.add_argument("--low-stock-threshold", type=int, help="Alert threshold (default 5)")

    us = subparsers.add_parser("update-stock", help="Set the stock level of a product")
    us.add_argument("--product-id", type=int, required=True, help="ID of the product")
    us.add_argument("--qty", type=int, required=True, help="New quantity")

    args = parser.parse_args()
    c = InventoryClient(base_url=args.url)

    try:
        if args.command == "list-products":
            print(c.list_products())
        elif args.command == "low-stock":
            print(c.low_stock())
        elif args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "add-product":
            print(c.add_product(args.name, args.price, args.stock, args.category, args.low_stock_threshold))
        elif args.command == "update-stock":
            print(c.update_stock(args.product_id, args.qty))
    except InventoryAPIError as e:
        print(f"[red]{e}[/red]")
        raise SystemExit(1)
