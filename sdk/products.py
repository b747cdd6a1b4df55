# sdk/products.py
import requests
import httpx
from typing import Any, Dict, Optional
from rich import print

class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def welcome(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        r.raise_for_status()
        return r.text

    def list_products(self, category: Optional[str] = None, min_price: Optional[float] = None,
                      max_price: Optional[float] = None, name: Optional[str] = None):
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if min_price is not None:
            params["minPrice"] = min_price
        if max_price is not None:
            params["maxPrice"] = max_price
        if name:
            params["name"] = name
        r = self.session.get(f"{self.base_url}/api/products", params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        r = self.session.post(f"{self.base_url}/api/products", json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Full replace: every field is sent, nothing is kept from the old record
    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool):
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json={
            "name": name, "description": description, "price": price,
            "category": category, "inStock": in_stock
        }, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        # no raise_for_status(): callers inspect the 404
        return r

    # Async delete (example)
    async def delete_product_async(self, product_id: str):
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.delete(f"{self.base_url}/api/products/{product_id}", headers=headers)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y")


if __name__ == "__main__":
    import argparse
    import os

    parser = argparse.ArgumentParser(description="Product API client")
    parser.add_argument("--base-url", default=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"))
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list-products", help="List products, optionally filtered")
    lp.add_argument("--category", help="Exact category (case-insensitive)")
    lp.add_argument("--min-price", type=float, help="Inclusive lower price bound")
    lp.add_argument("--max-price", type=float, help="Inclusive upper price bound")
    lp.add_argument("--name", help="Substring of the product name")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True)

    for cmd, help_text in (("create-product", "Create a product"), ("update-product", "Replace a product")):
        p = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            p.add_argument("--product-id", required=True)
        p.add_argument("--name", required=True)
        p.add_argument("--description", required=True)
        p.add_argument("--price", type=float, required=True)
        p.add_argument("--category", required=True)
        p.add_argument("--in-stock", type=_parse_bool, default=True)

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True)

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url, api_key=args.api_key)

    if args.command == "list-products":
        print(c.list_products(args.category, args.min_price, args.max_price, args.name))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.name, args.description, args.price, args.category, args.in_stock))
    elif args.command == "update-product":
        print(c.update_product(args.product_id, args.name, args.description, args.price,
                               args.category, args.in_stock))
    elif args.command == "delete-product":
        r = c.delete_product(args.product_id)
        print(r.status_code, r.json())
