"""
Inventory Tab for Admin Panel
"""
import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_utils import show_snack


def parse_quantity(value, minimum=0):
    """Whole number >= minimum, else None."""
    try:
        quantity = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return quantity if quantity >= minimum else None


def build_inventory_tab(page: ft.Page, api, is_desktop: bool):
    rows = ft.Column(spacing=6, scroll=ft.ScrollMode.AUTO, expand=True)
    new_dish = ft.Dropdown(label="Dish without stock", width=220)
    new_quantity = ft.TextField(label="Qty", width=80, height=50)

    def add_inventory(e):
        quantity = parse_quantity(new_quantity.value)
        if not new_dish.value or quantity is None:
            show_snack(page, "Pick a dish and a stock level of 0 or more", ok=False)
            return
        try:
            api.create_inventory(int(new_dish.value), quantity)
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        new_quantity.value = ""
        load_inventory()
        show_snack(page, "Inventory created")

    def set_stock(item, field):
        quantity = parse_quantity(field.value)
        if quantity is None:
            show_snack(page, "Stock must be a whole number of 0 or more", ok=False)
            return
        try:
            # version makes a concurrent edit fail instead of silently overwriting it
            api.update_inventory(item["inventory_id"], quantity, version=item["version"])
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            load_inventory()
            return
        load_inventory()
        show_snack(page, f"{item['dish_name']} stock set to {quantity}")

    def restock(item, field):
        quantity = parse_quantity(field.value, minimum=1)
        if quantity is None:
            show_snack(page, "Restock amount must be at least 1", ok=False)
            return
        try:
            api.restock(item["inventory_id"], quantity)
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        load_inventory()
        show_snack(page, f"Added {quantity} to {item['dish_name']}")

    def build_row(item):
        stock = ft.TextField(value=str(item["quantity_in_stock"]), width=90, height=45, text_size=13)
        amount = ft.TextField(hint_text="+qty", width=80, height=45, text_size=13)
        return ft.Card(
            content=ft.Container(
                padding=8,
                content=ft.Row([
                    ft.Text(item.get("dish_name") or f"Dish #{item['dish_id']}", expand=True, weight="bold"),
                    stock,
                    ft.IconButton(icon=ft.Icons.SAVE, tooltip="Set stock", on_click=lambda e: set_stock(item, stock)),
                    amount,
                    ft.IconButton(icon=ft.Icons.ADD_BOX, tooltip="Restock", on_click=lambda e: restock(item, amount)),
                ], spacing=6)
            )
        )

    def load_inventory():
        try:
            items = api.list_inventory()
            dishes = api.list_dishes()
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        rows.controls = [build_row(i) for i in items] or [ft.Text("No inventory yet.", color="grey700")]
        stocked = {i["dish_id"] for i in items}
        new_dish.options = [ft.dropdown.Option(key=str(d["dish_id"]), text=d["dish_name"])
                            for d in dishes if d["dish_id"] not in stocked]
        new_dish.value = None
        page.update()

    load_inventory()

    return ft.Tab(
        text="Inventory",
        icon=ft.Icons.INVENTORY,
        content=ft.Column([
            ft.Container(content=ft.Text("Inventory", size=20, weight="bold"), padding=10),
            ft.Container(content=ft.Row([new_dish, new_quantity, ft.ElevatedButton("Add", on_click=add_inventory)]),
                         padding=10),
            ft.Container(content=rows, expand=True, padding=10),
        ], expand=True, spacing=0)
    )
