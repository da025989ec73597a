#!/usr/bin/env python
from rich import print

from inventory.core import EmptyStoreError
from inventory.database import ProductStore
from inventory.log import configure_logging
from inventory.models import Product


def main():
    configure_logging("INFO")
    store = ProductStore()

    # -----------------------------
    # Add a product
    # -----------------------------
    print("\nAdding Widget...")
    print(store.add(Product(id=1, name="Widget", quantity=10, price=9.99)))

    # -----------------------------
    # Set quantity to zero
    # -----------------------------
    print("\nSetting Widget quantity to 0...")
    store.update(1, quantity=0)
    print(store.get(1))

    # -----------------------------
    # Re-key
    # -----------------------------
    print("\nMoving Widget from #1 to #7...")
    print(store.update(1, id=7))

    # -----------------------------
    # Delete, first declined then confirmed
    # -----------------------------
    print("\nDeleting Widget (declined)...")
    print(store.delete_if_confirmed(7, confirmed=False))
    print("\nDeleting Widget (confirmed)...")
    print(store.delete_if_confirmed(7, confirmed=True))

    # -----------------------------
    # List the now empty store
    # -----------------------------
    print("\nListing products...")
    try:
        print(store.list())
    except EmptyStoreError as e:
        print(f"[yellow]{e}[/yellow]")


if __name__ == "__main__":
    main()
