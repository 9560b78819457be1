"""
Orders Management Tab for Admin Panel
"""
import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_constants import DESKTOP_COLUMNS, GRID_SPACING, GRID_RUN_SPACING
from greatwok.ui.admin_utils import kitchen_sort, next_status, status_color, show_snack


def build_orders_tab(page: ft.Page, api, is_desktop: bool):
    """
    Build the Orders management tab

    Two views share the tab: whole orders, and the kitchen list of order items
    where finished items drop to the bottom.
    """
    view = {"mode": "orders"}  # "orders" or "kitchen"

    orders_grid = ft.GridView(runs_count=DESKTOP_COLUMNS, max_extent=500, child_aspect_ratio=3.0,
                              spacing=GRID_SPACING, run_spacing=GRID_RUN_SPACING, expand=True)
    orders_list = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)
    container = orders_grid if is_desktop else orders_list

    # ===================== STATUS CHANGES =====================

    def advance(label, change):
        try:
            change()
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
        else:
            show_snack(page, label)
        load()

    def status_buttons(status, on_next, on_done):
        nxt = next_status(status)
        return ft.Row([
            ft.ElevatedButton(nxt or "Finished", on_click=on_next, disabled=nxt is None,
                              style=ft.ButtonStyle(padding=8, color="blue700", bgcolor="grey200"), height=35),
            ft.ElevatedButton("Done", on_click=on_done, disabled=nxt is None,
                              style=ft.ButtonStyle(padding=8, color="green500", bgcolor="grey200"), height=35),
        ], spacing=5)

    def status_badge(status):
        return ft.Container(content=ft.Text(status, color="white", size=12),
                            bgcolor=status_color(status), padding=5, border_radius=5)

    # ===================== CARD BUILDERS =====================

    def build_order_card(order):
        oid = order["order_id"]
        return ft.Card(
            content=ft.Container(
                content=ft.Column([
                    ft.Row([ft.Text(f"Order #{oid}", weight="bold", size=14), status_badge(order["status"])],
                           alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    ft.Text(f"by {order.get('username') or 'Unknown'} ({order.get('delivery_type')})",
                            size=12, color="grey700"),
                    ft.Text(order.get("address") or "", size=11, color="grey700"),
                    ft.Row([
                        ft.Text(f"Total: ${order['total_price']:.2f}", size=14, weight="bold", color="green"),
                        status_buttons(
                            order["status"],
                            on_next=lambda e: advance(f"Order #{oid} updated",
                                                      lambda: api.set_order_status(oid, next_status(order["status"]))),
                            on_done=lambda e: advance(f"Order #{oid} done", lambda: api.set_order_status(oid)),
                        ),
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                ], spacing=3),
                padding=10,
                bgcolor="white",
                border_radius=12
            )
        )

    def build_item_card(item):
        iid = item["order_item_id"]
        return ft.Card(
            content=ft.Container(
                content=ft.Column([
                    ft.Row([
                        ft.Text(f"#{item['order_id']}  {item['quantity']} x {item.get('dish_name') or item['dish_id']}",
                                weight="bold", size=14),
                        status_badge(item["status"]),
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    status_buttons(
                        item["status"],
                        on_next=lambda e: advance("Item updated",
                                                  lambda: api.set_order_item_status(iid, next_status(item["status"]))),
                        on_done=lambda e: advance("Item done", lambda: api.set_order_item_status(iid)),
                    ),
                ], spacing=3),
                padding=10,
                bgcolor="white",
                border_radius=12
            )
        )

    # ===================== LOAD DATA =====================

    def load():
        try:
            if view["mode"] == "kitchen":
                cards = [build_item_card(i) for i in kitchen_sort(api.all_order_items())]
            else:
                cards = [build_order_card(o) for o in api.all_orders()]
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        container.controls = cards
        page.update()

    def switch_mode(e):
        view["mode"] = "kitchen" if e.control.value else "orders"
        load()

    load()

    return ft.Tab(
        text="Orders",
        icon=ft.Icons.SHOPPING_BAG,
        content=ft.Column([
            ft.Container(
                content=ft.Row([
                    ft.Text("Manage Orders", size=20, weight="bold"),
                    ft.Switch(label="Kitchen view", on_change=switch_mode),
                ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                padding=10
            ),
            ft.Container(content=container, expand=True, padding=10),
        ], expand=True, spacing=0)
    )
