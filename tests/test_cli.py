# tests/test_cli.py
import pytest
from rich.console import Console

import cli
from inventory.database import ProductStore
from inventory.models import Product


def scripted(monkeypatch, answers, confirm=None):
    """Feed prompt answers in order; confirm answers the delete question."""
    queue = list(answers)
    monkeypatch.setattr(cli, "prompt_with_autocomplete", lambda *a, **kw: queue.pop(0))
    monkeypatch.setattr(cli, "ask_confirmation", lambda message: confirm)
    return queue


@pytest.fixture
def out():
    return Console(record=True, width=200)


@pytest.fixture
def store():
    return ProductStore()


def test_parse_helpers():
    assert cli.parse_int(" 7 ", "ID") == 7
    assert cli.parse_float("9.99", "Price") == 9.99
    assert cli.parse_optional_int("  ", "ID") is None
    assert cli.parse_optional_int("0", "Quantity") == 0
    assert cli.parse_optional_float("", "Price") is None
    assert cli.parse_optional_text(" Widget ") == "Widget"
    assert cli.parse_optional_text("") is None
    with pytest.raises(ValueError, match="Invalid input for Quantity"):
        cli.parse_int("ten", "Quantity")


def test_add_product(monkeypatch, store, out):
    scripted(monkeypatch, ["1", "Widget", "10", "9.99"])
    cli.add_product(store, out)
    assert store.get(1) == Product(id=1, name="Widget", quantity=10, price=9.99)
    assert "Product added successfully." in out.export_text()


def test_add_product_bad_quantity(monkeypatch, store, out):
    scripted(monkeypatch, ["1", "Widget", "ten"])
    cli.add_product(store, out)
    assert len(store) == 0
    assert "Invalid input for Quantity" in out.export_text()


def test_add_duplicate_reports_error(monkeypatch, store, out):
    store.add(Product(id=1, name="Widget", quantity=10, price=9.99))
    scripted(monkeypatch, ["1", "Other", "1", "1"])
    cli.add_product(store, out)
    assert "Product ID #1 already exists" in out.export_text()
    assert store.get(1).name == "Widget"


def test_update_keeps_blank_fields(monkeypatch, store, out):
    store.add(Product(id=1, name="Widget", quantity=10, price=9.99))
    scripted(monkeypatch, ["1", "", "", "0", ""])
    cli.update_product(store, out)
    assert store.get(1) == Product(id=1, name="Widget", quantity=0, price=9.99)
    assert "Product updated successfully." in out.export_text()


def test_update_rekey(monkeypatch, store, out):
    store.add(Product(id=1, name="Widget", quantity=10, price=9.99))
    scripted(monkeypatch, ["1", "5", "Gizmo", "", "1.5"])
    cli.update_product(store, out)
    assert store.ids() == [5]
    assert store.get(5) == Product(id=5, name="Gizmo", quantity=10, price=1.5)


def test_update_unknown_id_stops_before_field_prompts(monkeypatch, store, out):
    queue = scripted(monkeypatch, ["3", "should not be read"])
    cli.update_product(store, out)
    assert "Product ID #3 not found" in out.export_text()
    assert queue == ["should not be read"]


def test_delete_confirmed(monkeypatch, store, out):
    store.add(Product(id=1, name="Widget", quantity=10, price=9.99))
    scripted(monkeypatch, ["1"], confirm=True)
    cli.delete_product(store, out)
    assert not store.exists(1)
    assert "Product #1 removed successfully" in out.export_text()


def test_delete_declined(monkeypatch, store, out):
    store.add(Product(id=1, name="Widget", quantity=10, price=9.99))
    scripted(monkeypatch, ["1"], confirm=False)
    cli.delete_product(store, out)
    assert store.exists(1)
    assert "Deletion of Product #1 canceled" in out.export_text()


def test_delete_unknown_never_asks(monkeypatch, store, out):
    def fail(message):
        raise AssertionError("confirmation should not be requested")

    scripted(monkeypatch, ["8"])
    monkeypatch.setattr(cli, "ask_confirmation", fail)
    cli.delete_product(store, out)
    assert "Product ID #8 not found" in out.export_text()


def test_list_formats_price_with_two_decimals(store, out):
    store.add(Product(id=2, name="Gadget", quantity=3, price=4.5))
    cli.list_products(store, out)
    text = out.export_text()
    assert "Gadget" in text
    assert "4.50" in text


def test_list_empty_store(store, out):
    cli.list_products(store, out)
    assert "No products found in the inventory" in out.export_text()


def test_menu_runs_scenario_and_exits(monkeypatch, store, out):
    scripted(monkeypatch, [
        "1", "1", "Widget", "10", "9.99",
        "2", "1", "", "", "0", "",
        "5", "1",
        "3", "1",
        "4",
        "9",
        "6",
    ], confirm=True)
    cli.menu(store, out)
    text = out.export_text()
    assert "Product #1 removed successfully" in text
    assert "No products found in the inventory" in text
    assert "Invalid option. Please select a number from 1 to 6." in text
    assert "Exiting Inventory Control..." in text
    assert len(store) == 0


def test_menu_exits_on_eof(monkeypatch, store, out):
    def eof(*a, **kw):
        raise EOFError

    monkeypatch.setattr(cli, "prompt_with_autocomplete", eof)
    cli.menu(store, out)
    assert "Exiting Inventory Control..." in out.export_text()


def test_list_shows_bracketed_names_verbatim(store, out):
    store.add(Product(id=1, name="Bolt [/] M6", quantity=4, price=0.25))
    store.add(Product(id=2, name="Cable [red] 2m", quantity=1, price=3.0))
    cli.list_products(store, out)
    text = out.export_text()
    assert "Bolt [/] M6" in text
    assert "Cable [red] 2m" in text


def test_view_bracketed_name_then_menu_continues(monkeypatch, store, out):
    store.add(Product(id=1, name="Bolt [/] M6", quantity=4, price=0.25))
    scripted(monkeypatch, ["5", "1", "4", "6"])
    cli.menu(store, out)
    text = out.export_text()
    assert "Bolt [/] M6" in text
    assert "Exiting Inventory Control..." in text


def test_status_message_with_brackets_is_printed(out):
    out.print(cli.show_status("Error: input_value='[/]' [type=int_parsing]", False))
    assert "input_value='[/]' [type=int_parsing]" in out.export_text()


def test_menu_exits_on_eof_inside_action(monkeypatch, store, out):
    answers = ["1", "1"]

    def answer(*a, **kw):
        if not answers:
            raise EOFError
        return answers.pop(0)

    monkeypatch.setattr(cli, "prompt_with_autocomplete", answer)
    cli.menu(store, out)
    assert "Exiting Inventory Control..." in out.export_text()
    assert len(store) == 0
