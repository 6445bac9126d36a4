#!/usr/bin/env python
import os
from sdk.pyinventory import InventoryClient, InventoryAPIError

def main():
    c = InventoryClient(base_url=os.environ.get("INVENTORY_API_URL", "http://127.0.0.1:3001"))

    # -----------------------------
    # Health / where data lives
    # -----------------------------
    print("Checking service...")
    print(c.health())

    # -----------------------------
    # Add products
    # -----------------------------
    print("\nAdding products...")
    widget = c.add_product("Widget", "9.99", 10, "Hardware")
    gadget = c.add_product("Gadget", 24.5, 2, "Hardware", low_stock_threshold=3)
    print(widget)
    print(gadget)

    # -----------------------------
    # List products
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    # -----------------------------
    # Update stock
    # -----------------------------
    print(f"\nSetting stock of product {widget['id']} to 3...")
    print(c.update_stock(widget["id"], 3))

    # -----------------------------
    # Rejected updates
    # -----------------------------
    for pid, qty in ((99999, 1), (widget["id"], -5)):
        try:
            c.update_stock(pid, qty)
        except InventoryAPIError as e:
            print(f"update_stock({pid}, {qty}) rejected: {e}")

    # -----------------------------
    # Low-stock report
    # -----------------------------
    print("\nLow-stock products...")
    print(c.low_stock())

if __name__ == "__main__":
    main()
