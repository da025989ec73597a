# cli.py
import sys
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.markup import escape
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import structlog

from inventory.config import load_settings
from inventory.core import DeleteOutcome, InventoryError
from inventory.database import ProductStore
from inventory.log import configure_logging
from inventory.models import Product, ProductUpdate

console = Console()
logger = structlog.get_logger(__name__)

MENU_CHOICES = ["1", "2", "3", "4", "5", "6", "q", "quit", "exit"]

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
})


# ---------------------------
# Input parsing
# ---------------------------
def parse_int(raw: str, field: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid input for {field}") from None


def parse_float(raw: str, field: str) -> float:
    try:
        return float(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid input for {field}") from None


# An empty answer means "keep the current value" in the update flow.
def parse_optional_int(raw: str, field: str) -> Optional[int]:
    return parse_int(raw, field) if raw.strip() else None


def parse_optional_float(raw: str, field: str) -> Optional[float]:
    return parse_float(raw, field) if raw.strip() else None


def parse_optional_text(raw: str) -> Optional[str]:
    text = raw.strip()
    return text if text else None


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Product], out: Console = console):
    table = Table(
        title="📦 Inventory",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Quantity", justify="right")
    table.add_column("Price", justify="right")

    for p in sorted(products, key=lambda p: p.id):
        table.add_row(str(p.id), escape(p.name), str(p.quantity), f"{p.price:.2f}")
    out.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{escape(message)}[/{style}]", title="Status")


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=24)
    header.add_column("right", width=24)
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row("[bold blue]Welcome to Inventory Control![/bold blue]", f"[dim]{now}[/dim]")
    return Panel(header, style="bold blue")


# ---------------------------
# Store wrapper
# ---------------------------
def try_store(fn, *args, success_msg: Optional[str] = None, out: Console = console, **kwargs):
    """
    Calls fn(*args, **kwargs) and reports the outcome in a status panel.
    Returns the result, or None when the store rejected the call.
    """
    try:
        result = fn(*args, **kwargs)
    except (InventoryError, ValidationError) as e:
        out.print(show_status(f"Error: {e}", False))
        return None
    if success_msg:
        out.print(show_status(success_msg, True))
    return result


# ---------------------------
# Input helpers
# ---------------------------
def get_id_completer(store: ProductStore):
    return WordCompleter([str(i) for i in store.ids()])


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_confirmation(message: str) -> bool:
    return Confirm.ask(message, console=console)


# ---------------------------
# Menu actions
# ---------------------------
def add_product(store: ProductStore, out: Console = console):
    try:
        product_id = parse_int(prompt_with_autocomplete("Enter Product ID:"), "ID")
        name = prompt_with_autocomplete("Enter Product Name:").strip()
        quantity = parse_int(prompt_with_autocomplete("Enter Product Quantity:"), "Quantity")
        price = parse_float(prompt_with_autocomplete("Enter Product Price in US $:"), "Price")
    except ValueError as e:
        out.print(f"[red]{escape(str(e))}[/red]")
        return

    product = Product(id=product_id, name=name, quantity=quantity, price=price)
    try_store(store.add, product, success_msg="Product added successfully.", out=out)


def update_product(store: ProductStore, out: Console = console):
    try:
        product_id = parse_int(
            prompt_with_autocomplete("Enter Product ID to update it:", completer=get_id_completer(store)), "ID")
    except ValueError as e:
        out.print(f"[red]{escape(str(e))}[/red]")
        return

    current = try_store(store.get, product_id, out=out)
    if current is None:
        return
    show_products([current], out)

    keep = "(leave it empty to keep current value)"
    try:
        new_id = parse_optional_int(prompt_with_autocomplete(f"Enter Product NEW ID {keep}:"), "ID")
        new_name = parse_optional_text(prompt_with_autocomplete(f"Enter Product NEW Name {keep}:"))
        new_quantity = parse_optional_int(prompt_with_autocomplete(f"Enter Product NEW Quantity {keep}:"), "Quantity")
        new_price = parse_optional_float(prompt_with_autocomplete(f"Enter Product NEW Price in US $ {keep}:"), "Price")
    except ValueError as e:
        out.print(f"[red]{escape(str(e))}[/red]")
        return

    answers = {"id": new_id, "name": new_name, "quantity": new_quantity, "price": new_price}
    changes = ProductUpdate(**{k: v for k, v in answers.items() if v is not None})
    if changes.is_empty():
        out.print("[yellow]Nothing to update.[/yellow]")
        return
    try_store(store.update, product_id, changes, success_msg="Product updated successfully.", out=out)


def delete_product(store: ProductStore, out: Console = console):
    out.print("[bold red]WARNING: THIS ACTION CANNOT BE UNDONE![/bold red]")
    try:
        product_id = parse_int(
            prompt_with_autocomplete("Enter product ID to REMOVE it:", completer=get_id_completer(store)), "ID")
    except ValueError as e:
        out.print(f"[red]{escape(str(e))}[/red]")
        return

    if not store.exists(product_id):
        out.print(show_status(f"Error: Product ID #{product_id} not found", False))
        return

    confirmed = ask_confirmation(f"Are you sure you want to delete Product #{product_id}?")
    outcome = try_store(store.delete_if_confirmed, product_id, confirmed, out=out)
    if outcome is DeleteOutcome.REMOVED:
        out.print(show_status(f"Product #{product_id} removed successfully", True))
    elif outcome is DeleteOutcome.CANCELED:
        out.print(show_status(f"Deletion of Product #{product_id} canceled", True))


def list_products(store: ProductStore, out: Console = console):
    products = try_store(store.list, out=out)
    if products is None:
        return
    if not products:
        out.print("[italic yellow]No products found[/italic yellow]")
        return
    show_products(products, out)


def view_product(store: ProductStore, out: Console = console):
    try:
        product_id = parse_int(
            prompt_with_autocomplete("Enter Product ID:", completer=get_id_completer(store)), "ID")
    except ValueError as e:
        out.print(f"[red]{escape(str(e))}[/red]")
        return
    product = try_store(store.get, product_id, out=out)
    if product is not None:
        show_products([product], out)


ACTIONS = {
    "1": add_product,
    "2": update_product,
    "3": delete_product,
    "4": list_products,
    "5": view_product,
}


# ---------------------------
# Main menu
# ---------------------------
def menu(store: ProductStore, out: Console = console):
    out.print(create_header())

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in [
            ("1", "➕ Add product"),
            ("2", "✏️ Update product"),
            ("3", "🗑️ Delete product"),
            ("4", "📦 List products"),
            ("5", "ℹ️ View product by ID"),
            ("6", "👋 Exit"),
        ]:
            menu_table.add_row(*row)
        out.print(Panel(menu_table, title="What would you like to do?", border_style="yellow"))

        # End of input, at the menu or inside an action, ends the session.
        try:
            choice = prompt_with_autocomplete(
                "\nChoose an option", completer=WordCompleter(MENU_CHOICES)
            ).strip().lower()
            action = ACTIONS.get(choice)
            if action is not None:
                action(store, out)
            elif choice not in ("6", "q", "quit", "exit"):
                out.print("[red]Invalid option. Please select a number from 1 to 6.[/red]")
        except EOFError:
            choice = "6"

        if choice in ("6", "q", "quit", "exit"):
            out.print(Panel.fit("[bold green]Exiting Inventory Control...[/bold green]", title="Goodbye"))
            return

        out.print()
        out.rule(style="dim")


def main() -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    store = ProductStore(strict_empty=settings.strict_empty)
    logger.info("session_started", strict_empty=settings.strict_empty)
    try:
        menu(store)
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
