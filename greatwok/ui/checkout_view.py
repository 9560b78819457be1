import logging

import flet as ft

from greatwok.ui.api_client import ApiError, cart_total, new_idempotency_key
from greatwok.ui.admin_constants import YELLOW
from greatwok.ui.admin_utils import show_snack

logger = logging.getLogger(__name__)


def checkout_view(page: ft.Page, api, cart_items, on_back, on_placed):
    """Address selection and order submission for the current cart snapshot."""
    try:
        addresses = api.list_addresses()
    except ApiError as ex:
        addresses = []
        logger.warning("Could not load addresses: %s", ex.message)

    # one key per checkout attempt; retries of this screen reuse it
    attempt_key = new_idempotency_key()

    address_dd = ft.Dropdown(
        label="Delivery address",
        options=[ft.dropdown.Option(key=str(a["address_id"]),
                                    text=f"{a['address_line']}, {a['city']}") for a in addresses],
        value=str(addresses[0]["address_id"]) if addresses else None,
        width=350,
    )
    delivery_type = ft.RadioGroup(
        value="delivery",
        content=ft.Row([ft.Radio(value="delivery", label="Delivery"), ft.Radio(value="pickup", label="Pickup")])
    )
    message = ft.Text("", color="red", size=12)
    place_btn = ft.ElevatedButton("Place Order", width=350, height=45,
                                  style=ft.ButtonStyle(bgcolor=YELLOW, color="white"))

    def place_order(e):
        if not address_dd.value:
            message.value = "Add an address in your profile first."
            page.update()
            return
        place_btn.disabled = True
        page.update()
        try:
            order = api.place_order(int(address_dd.value), cart_items, delivery_type.value,
                                    idempotency_key=attempt_key)
        except ApiError as ex:
            message.value = ex.message
            place_btn.disabled = False
            page.update()
            return
        show_snack(page, f"Order #{order['order_id']} placed!")
        on_placed()

    place_btn.on_click = place_order

    lines = [
        ft.Row([
            ft.Text(f"{i['quantity']} x {i.get('dish_name') or i['dish_id']}", expand=True),
            ft.Text(f"${(i.get('price') or 0) * i['quantity']:.2f}")
        ]) for i in cart_items
    ]

    return ft.Column([
        ft.Row([
            ft.IconButton(icon=ft.Icons.ARROW_BACK, on_click=on_back),
            ft.Text("Checkout", size=20, weight="bold"),
        ]),
        ft.Container(content=ft.Column(lines, spacing=4), padding=10),
        ft.Divider(),
        ft.Container(content=ft.Text(f"Total: ${cart_total(cart_items):.2f}", size=16, weight="bold"), padding=10),
        ft.Container(content=ft.Column([address_dd, delivery_type, message, place_btn], spacing=10), padding=10),
    ], expand=True, scroll=ft.ScrollMode.AUTO)
