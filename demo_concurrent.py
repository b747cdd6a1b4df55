import asyncio
import os
from sdk.products import ProductClient

async def main():
    c = ProductClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "mysecretkey123"),
    )

    product = c.create_product("Gaming Laptop", "32GB RAM, RTX GPU", 2500, "electronics", True)
    print(f"\n🖥️  Created product: {product}")

    # Two clients race to delete the same product: exactly one wins
    print("\n⚡ Deleting concurrently...")
    results = await asyncio.gather(
        c.delete_product_async(product["id"]),
        c.delete_product_async(product["id"]),
    )
    for r in results:
        if r.status_code == 200:
            print(f"✅ deleted: {r.json()['product']['name']}")
        else:
            print(f"❌ {r.status_code}: {r.json()['error']}")

    print("\n📦 Remaining products:", c.list_products())

if __name__ == "__main__":
    asyncio.run(main())
