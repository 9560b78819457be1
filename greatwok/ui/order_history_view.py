import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_utils import show_snack, status_color, open_dialog, close_dialog


def order_history_widget(page: ft.Page, api):
    """Order history tab: the user's orders, their items, and a review form per dish."""
    try:
        orders = api.my_orders()
    except ApiError as ex:
        return ft.Container(content=ft.Text(f"Could not load orders: {ex.message}", color="red"), padding=20)

    orders_column = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)

    def review_dialog(item):
        rating = ft.Dropdown(label="Rating", value="5", width=120,
                             options=[ft.dropdown.Option(str(n)) for n in range(1, 6)])
        comment = ft.TextField(label="Comment", multiline=True, min_lines=2, width=300)

        def submit(e):
            try:
                api.create_review(item["dish_id"], int(rating.value), (comment.value or "").strip() or None)
            except ApiError as ex:
                show_snack(page, ex.message, ok=False)
                return
            close_dialog(page, dlg)
            show_snack(page, "Thanks for your review!")

        dlg = ft.AlertDialog(
            modal=True,
            title=ft.Text(f"Review {item.get('dish_name') or 'dish'}"),
            content=ft.Column([rating, comment], tight=True),
            actions=[
                ft.TextButton("Cancel", on_click=lambda e: close_dialog(page, dlg)),
                ft.ElevatedButton("Submit", on_click=submit),
            ],
        )
        open_dialog(page, dlg)

    def show_items(order):
        try:
            items = api.order_items(order["order_id"])
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        rows = [
            ft.Row([
                ft.Text(f"{i['quantity']} x {i.get('dish_name') or i['dish_id']}", expand=True),
                ft.Text(f"${i['price'] * i['quantity']:.2f}"),
                ft.IconButton(icon=ft.Icons.RATE_REVIEW, tooltip="Review", on_click=lambda e, it=i: review_dialog(it)),
            ]) for i in items
        ]
        dlg = ft.AlertDialog(
            title=ft.Text(f"Order #{order['order_id']}"),
            content=ft.Column(rows, tight=True, scroll=ft.ScrollMode.AUTO),
            actions=[ft.TextButton("Close", on_click=lambda e: close_dialog(page, dlg))],
        )
        open_dialog(page, dlg)

    if not orders:
        orders_column.controls.append(ft.Text("No orders yet.", color="grey700"))
    for order in orders:
        orders_column.controls.append(
            ft.Card(
                content=ft.Container(
                    padding=10,
                    on_click=lambda e, o=order: show_items(o),
                    content=ft.Column([
                        ft.Row([
                            ft.Text(f"Order #{order['order_id']}", weight="bold"),
                            ft.Container(content=ft.Text(order["status"], color="white", size=12),
                                         bgcolor=status_color(order["status"]), padding=5, border_radius=5),
                        ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                        ft.Text((order.get("placed_at") or "")[:16].replace("T", " "), size=11, color="grey700"),
                        ft.Text(f"Total: ${order['total_price']:.2f}", weight="bold", color="green"),
                    ], spacing=3)
                )
            )
        )

    return ft.Column([
        ft.Container(content=ft.Text("My Orders", size=20, weight="bold"), padding=ft.padding.only(top=15, left=15)),
        ft.Container(content=orders_column, expand=True, padding=10, bgcolor="grey100"),
    ], expand=True, spacing=0)
