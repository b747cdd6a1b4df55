#!/usr/bin/env python
import os
from sdk.products import ProductClient

def main():
    c = ProductClient(
        base_url=os.getenv("PRODUCT_API_URL", "http://127.0.0.1:3000"),
        api_key=os.getenv("API_KEY", "mysecretkey123"),
    )

    print(c.welcome())

    # -----------------------------
    # Seeded catalog
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print("\nElectronics from 900 up...")
    print(c.list_products(category="electronics", min_price=900))

    # -----------------------------
    # Create, replace, delete
    # -----------------------------
    print("\nCreating a product...")
    kettle = c.create_product("Kettle", "Electric kettle, 1.7L", 35, "kitchen", True)
    print(kettle)

    print("\nReplacing it...")
    print(c.update_product(kettle["id"], "Kettle Pro", "Temperature control kettle", 49.5, "kitchen", False))

    print("\nSearching for 'kettle'...")
    print(c.list_products(name="kettle"))

    print("\nDeleting it twice...")
    for _ in range(2):
        r = c.delete_product(kettle["id"])
        print(r.status_code, r.json())

if __name__ == "__main__":
    main()
