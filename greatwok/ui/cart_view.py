import flet as ft

from greatwok.ui.api_client import ApiError, cart_total
from greatwok.ui.admin_constants import YELLOW
from greatwok.ui.admin_utils import show_snack


def cart_view(page: ft.Page, api, switch_tab, show_checkout_page, refresh_cart):
    try:
        cart_items = api.get_cart()
    except ApiError as ex:
        return ft.Container(content=ft.Text(f"Could not load your cart: {ex.message}", color="red"), padding=20)

    cart_column = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO)

    def change_quantity(item, change):
        new_quantity = item["quantity"] + change
        try:
            if new_quantity <= 0:
                api.remove_cart_item(item["cart_item_id"])
            else:
                api.update_cart_item(item["cart_item_id"], new_quantity)
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
        refresh_cart()

    if not cart_items:
        cart_column.controls.append(
            ft.Container(
                content=ft.Column([
                    ft.Icon(ft.Icons.SHOPPING_CART, size=80, color="grey"),
                    ft.Text("Hungry?", size=28, weight="bold"),
                    ft.Text("You haven't added anything to your cart!", size=14, color="grey700"),
                    ft.ElevatedButton("Browse", on_click=lambda e: switch_tab("food"),
                                      style=ft.ButtonStyle(bgcolor=YELLOW, color="white")),
                ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=10),
                padding=40,
                alignment=ft.alignment.center
            )
        )
    else:
        for item in cart_items:
            subtotal = (item.get("price") or 0) * item["quantity"]
            cart_column.controls.append(
                ft.Card(
                    content=ft.Container(
                        padding=10,
                        content=ft.Row([
                            ft.Column([
                                ft.Text(item.get("dish_name") or f"Dish #{item['dish_id']}", weight="bold", size=14),
                                ft.Text(f"${item.get('price') or 0:.2f} each", size=11, color="grey700"),
                                ft.Text(f"Subtotal: ${subtotal:.2f}", size=12, weight="bold", color="green"),
                            ], spacing=2, expand=True),
                            ft.Row([
                                ft.IconButton(
                                    icon=ft.Icons.DELETE if item["quantity"] == 1 else ft.Icons.REMOVE,
                                    icon_color="red" if item["quantity"] == 1 else None,
                                    icon_size=16,
                                    on_click=lambda e, i=item: change_quantity(i, -1)
                                ),
                                ft.Text(str(item["quantity"]), size=14, weight="bold"),
                                ft.IconButton(icon=ft.Icons.ADD, icon_size=16,
                                              on_click=lambda e, i=item: change_quantity(i, 1)),
                            ], spacing=2)
                        ], spacing=8)
                    )
                )
            )

    total = cart_total(cart_items) if cart_items else 0
    return ft.Column([
        ft.Container(content=ft.Text("Cart", size=20, weight="bold"),
                     padding=ft.padding.only(top=15, left=15, right=15, bottom=8)),
        ft.Container(content=cart_column, expand=True, padding=10, bgcolor="grey100"),
        ft.Container(
            content=ft.Column([
                ft.Text(f"Total: ${total:.2f}", size=16, weight="bold"),
                ft.ElevatedButton(
                    "Checkout",
                    on_click=lambda e: show_checkout_page(cart_items),
                    disabled=not cart_items,
                    style=ft.ButtonStyle(bgcolor=YELLOW if cart_items else "grey", color="white"),
                    width=350,
                    height=45
                )
            ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=8),
            bgcolor="white",
            padding=ft.padding.only(bottom=12, top=8)
        )
    ], expand=True, spacing=0)
