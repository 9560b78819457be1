import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_constants import RED
from greatwok.ui.cart_view import cart_view
from greatwok.ui.checkout_view import checkout_view
from greatwok.ui.menu_view import menu_view
from greatwok.ui.order_history_view import order_history_widget
from greatwok.ui.profile_view import profile_view_widget


def home_view(page: ft.Page, api):
    page.title = "The Great Wok"

    nav_state = {"tab": "food"}  # "food", "cart", "orders", "profile"
    checkout_state = {"items": None}
    cart_count_text = ft.Text("", color="white", size=10, weight="bold")
    cart_badge_container = ft.Container(
        content=cart_count_text,
        bgcolor=RED,
        border_radius=10,
        padding=ft.padding.symmetric(horizontal=6, vertical=3),
        right=5,
        top=5,
        visible=False
    )
    content_container = ft.Container(expand=True)
    footer = ft.Container(
        bgcolor="white",
        padding=ft.padding.symmetric(vertical=6),
        border=ft.border.only(top=ft.BorderSide(1, "grey300")),
        height=60
    )

    # --- CART BADGE ---
    def update_cart_badge():
        try:
            total_items = sum(i["quantity"] for i in api.get_cart())
        except ApiError:
            total_items = 0
        cart_count_text.value = str(total_items) if total_items else ""
        cart_badge_container.visible = total_items > 0
        page.update()

    # --- FOOTER NAVIGATION ---
    def nav_icon(icon, label, tab):
        return ft.Column([
            ft.IconButton(icon=icon, tooltip=label, icon_color=RED if tab == nav_state["tab"] else "black",
                          on_click=lambda e: switch_tab(tab)),
            ft.Text(label, size=8, text_align=ft.TextAlign.CENTER)
        ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, spacing=0)

    def update_footer():
        footer.content = ft.Row([
            nav_icon(ft.Icons.RESTAURANT_MENU, "Food", "food"),
            ft.Stack([nav_icon(ft.Icons.SHOPPING_CART, "Cart", "cart"), cart_badge_container], width=50, height=50),
            nav_icon(ft.Icons.HISTORY, "Orders", "orders"),
            nav_icon(ft.Icons.PERSON, "Profile", "profile"),
        ], alignment=ft.MainAxisAlignment.SPACE_AROUND)

    def switch_tab(tab):
        nav_state["tab"] = tab
        checkout_state["items"] = None
        render_main_content()

    def show_checkout_page(cart_items):
        checkout_state["items"] = cart_items
        render_main_content()

    def order_placed():
        update_cart_badge()
        switch_tab("orders")

    def logout(e=None):
        api.logout()
        page.go("/logout")

    def render_main_content():
        tab = nav_state["tab"]
        if checkout_state["items"]:
            content_container.content = checkout_view(
                page, api, checkout_state["items"], on_back=lambda e: switch_tab("cart"), on_placed=order_placed
            )
        elif tab == "cart":
            content_container.content = cart_view(
                page, api, switch_tab, show_checkout_page, refresh_cart=lambda: (update_cart_badge(), render_main_content())
            )
        elif tab == "orders":
            content_container.content = order_history_widget(page, api)
        elif tab == "profile":
            content_container.content = profile_view_widget(page, api, on_logout=logout)
        else:
            content_container.content = menu_view(page, api, on_cart_changed=update_cart_badge)
        update_footer()
        page.update()

    page.clean()
    page.add(ft.Column([content_container, footer], expand=True, spacing=0))
    render_main_content()
    update_cart_badge()
