"""
Admin Panel - Main Orchestrator
Imports and coordinates all admin tabs
"""
import flet as ft

from greatwok.ui.admin_constants import BREAKPOINT, RED
from greatwok.ui.admin_categories import build_categories_tab
from greatwok.ui.admin_dishes import build_dishes_tab
from greatwok.ui.admin_inventory import build_inventory_tab
from greatwok.ui.admin_orders import build_orders_tab
from greatwok.ui.admin_reviews import build_reviews_tab
from greatwok.ui.admin_users import build_users_tab
from greatwok.ui.admin_utils import show_snack


def admin_view(page: ft.Page, api):
    page.title = "Admin Panel"

    if not api.store.is_admin:
        show_snack(page, "Access denied. Admins only.", ok=False)
        page.go("/home")
        return

    is_desktop = (page.window.width or 0) > BREAKPOINT

    tabs = ft.Tabs(
        selected_index=0,
        animation_duration=300,
        tabs=[
            build_dishes_tab(page, api, is_desktop),
            build_categories_tab(page, api, is_desktop),
            build_inventory_tab(page, api, is_desktop),
            build_orders_tab(page, api, is_desktop),
            build_users_tab(page, api, is_desktop),
            build_reviews_tab(page, api, is_desktop),
        ],
        expand=True,
        label_color=RED,
        unselected_label_color="black",
        indicator_color=RED,
        divider_color="grey300"
    )

    def logout_user(e):
        api.logout()
        page.go("/logout")

    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([
                ft.Container(
                    content=ft.Row([
                        ft.Text("Admin Panel", size=20, weight="bold"),
                        ft.IconButton(icon=ft.Icons.LOGOUT, tooltip="Logout", on_click=logout_user),
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    padding=ft.padding.only(top=15, left=15, right=15, bottom=8),
                    bgcolor="white"
                ),
                ft.Container(
                    content=tabs,
                    expand=True,
                    gradient=ft.LinearGradient(
                        begin=ft.alignment.top_center,
                        end=ft.alignment.bottom_center,
                        colors=["#FFF6F6", "#F7C171", "#D49535"]
                    )
                )
            ], expand=True, spacing=0),
            expand=True,
            padding=0
        )
    )
    page.update()
