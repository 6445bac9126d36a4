import asyncio
import os
from sdk.pyinventory import InventoryClient, InventoryAPIError

async def set_stock(client, product_id, qty):
    try:
        resp = await client.update_stock_async(product_id, qty)
        print(f"✅ product {product_id} stock -> {resp['stock']}")
    except InventoryAPIError as e:
        print(f"❌ product {product_id} update failed: {e}")

async def main():
    c = InventoryClient(base_url=os.environ.get("INVENTORY_API_URL", "http://127.0.0.1:3001"))

    products = [c.add_product(f"Part {i}", 1.5, 0, "parts") for i in range(5)]
    print(f"\n📦 Added {len(products)} products")

    # Writes are serialized server-side, so none of these should be lost
    print("\n⚡ Updating stock concurrently...")
    await asyncio.gather(*(set_stock(c, p["id"], (i + 1) * 10) for i, p in enumerate(products)))

    print("\n📦 Final state:")
    for p in products:
        print(c.get_product(p["id"]))

if __name__ == "__main__":
    asyncio.run(main())
