import asyncio
import logging
from typing import Dict, Any, List, Optional
from fastapi import HTTPException
from fastapi.concurrency import run_in_threadpool

from .core import ProductIn, StockUpdateIn, _make_product_dict, same_id
from .database import JsonFileStorage, StorageError
from .models import DEFAULT_LOW_STOCK_THRESHOLD

# This file contains the business rules behind every endpoint.

logger = logging.getLogger(__name__)


def _is_number(v: Any) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)

def _next_id(products: List[Any]) -> int:
    # Hand-edited records with non-numeric ids (or no id) are ignored
    ids = [p["id"] for p in products if isinstance(p, dict) and _is_number(p.get("id"))]
    return int(max(ids, default=0)) + 1

def _find(products: List[Any], product_id: Any) -> Optional[Dict[str, Any]]:
    for p in products:
        if isinstance(p, dict) and "id" in p and same_id(p["id"], product_id):
            return p
    return None


class InventoryService:
    """Validation, lookup and id assignment on top of the whole-file store.

    File I/O runs in the threadpool, so requests do interleave around it.
    Every load-mutate-save sequence runs under one asyncio.Lock, so two
    requests in this process never interleave their writes. Other processes
    writing the same file are not coordinated.
    """

    def __init__(self, storage: JsonFileStorage, mask_read_failures: bool = True):
        self.storage = storage
        self.mask_read_failures = mask_read_failures
        self._lock = asyncio.Lock()

    async def _read_products(self) -> List[Any]:
        result = await run_in_threadpool(self.storage.load)
        if result.ok:
            return result.products
        if self.mask_read_failures:
            logger.warning("Serving empty inventory, store unreadable: %s", result.error)
            return []
        raise HTTPException(status_code=500, detail="Failed to read inventory data.")

    async def _save(self, products: List[Any], failure: str) -> None:
        try:
            await run_in_threadpool(self.storage.save, products)
        except StorageError:
            raise HTTPException(status_code=500, detail=failure)

    # Reads
    async def list_products(self) -> List[Any]:
        return await self._read_products()

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        product = _find(await self._read_products(), product_id)
        if product is None:
            raise HTTPException(status_code=404, detail="Product not found.")
        return product

    async def low_stock_products(self) -> List[Dict[str, Any]]:
        out = []
        for p in await self._read_products():
            if not isinstance(p, dict) or not _is_number(p.get("stock")):
                continue
            threshold = p.get("lowStockThreshold")
            if not _is_number(threshold) or not threshold:
                threshold = DEFAULT_LOW_STOCK_THRESHOLD
            if p["stock"] <= threshold:
                out.append(p)
        return out

    # Writes
    async def update_stock(self, payload: StockUpdateIn) -> Dict[str, Any]:
        if payload.missing_required():
            raise HTTPException(status_code=400, detail="Missing 'id' or 'newQuantity'.")
        if payload.new_quantity is None:
            raise HTTPException(status_code=400, detail="Stock quantity must be a number.")
        if payload.new_quantity < 0:
            raise HTTPException(status_code=400, detail="Stock quantity cannot be negative.")

        async with self._lock:
            products = await self._read_products()
            product = _find(products, payload.id)
            if product is None:
                raise HTTPException(status_code=404, detail="Product not found.")

            product["stock"] = payload.new_quantity
            await self._save(products, "Failed to update inventory.")

        logger.info("Stock for product %s set to %s", payload.id, payload.new_quantity)
        return product

    async def add_product(self, payload: ProductIn) -> Dict[str, Any]:
        if payload.missing_required():
            raise HTTPException(
                status_code=400, detail="Missing required fields: name, price, stock, category."
            )
        if payload.stock is not None and payload.stock < 0:
            raise HTTPException(status_code=400, detail="Stock quantity cannot be negative.")

        async with self._lock:
            products = await self._read_products()
            product = _make_product_dict(_next_id(products), payload)
            products.append(product)
            await self._save(products, "Failed to add product.")

        logger.info("Added product %s (%s)", product["id"], product["name"])
        return product
