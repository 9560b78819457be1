import logging

import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_constants import YELLOW, RED
from greatwok.ui.admin_utils import filter_dishes, show_snack

logger = logging.getLogger(__name__)


def menu_view(page: ft.Page, api, on_cart_changed):
    """Menu tab: search box, category chips and the dish grid."""
    try:
        dishes = [d for d in api.list_dishes() if d.get("is_available", True)]
        categories = api.list_categories()
    except ApiError as ex:
        logger.error("Could not load menu: %s", ex.message)
        return ft.Container(content=ft.Text(f"Could not load the menu: {ex.message}", color="red"), padding=20)

    state = {"search": "", "category_id": None}
    grid = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)

    def add(dish):
        try:
            api.add_to_cart(dish["dish_id"], 1)
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        on_cart_changed()
        show_snack(page, f"{dish['dish_name']} added to cart")

    def dish_card(dish):
        return ft.Card(
            content=ft.Container(
                padding=10,
                content=ft.Row([
                    ft.Image(src=dish["image_url"], width=70, height=70, fit=ft.ImageFit.COVER, border_radius=8)
                    if dish.get("image_url") else
                    ft.Container(width=70, height=70, bgcolor="grey300", border_radius=8),
                    ft.Column([
                        ft.Text(dish["dish_name"], weight="bold", size=14),
                        ft.Text(dish.get("description") or "", size=11, color="grey700"),
                        ft.Text(f"${dish['price']:.2f}", size=13, weight="bold", color="green"),
                    ], spacing=2, expand=True),
                    ft.IconButton(icon=ft.Icons.ADD_SHOPPING_CART, icon_color=RED, tooltip="Add to cart",
                                  on_click=lambda e, d=dish: add(d)),
                ], spacing=8)
            )
        )

    def render():
        grid.controls.clear()
        shown = filter_dishes(dishes, state["search"], state["category_id"])
        if not shown:
            grid.controls.append(ft.Text("No dishes match your search.", color="grey700"))
        for dish in shown:
            grid.controls.append(dish_card(dish))
        page.update()

    def on_search(e):
        state["search"] = e.control.value
        render()

    def pick_category(category_id):
        state["category_id"] = category_id
        chips.controls = build_chips()
        render()

    def build_chips():
        chips_list = [ft.ElevatedButton(
            "All",
            on_click=lambda e: pick_category(None),
            style=ft.ButtonStyle(bgcolor=YELLOW if state["category_id"] is None else "grey200", color="black"),
        )]
        for category in categories:
            cid = category["category_id"]
            chips_list.append(ft.ElevatedButton(
                category["category_name"],
                on_click=lambda e, c=cid: pick_category(c),
                style=ft.ButtonStyle(bgcolor=YELLOW if state["category_id"] == cid else "grey200", color="black"),
            ))
        return chips_list

    chips = ft.Row(build_chips(), scroll=ft.ScrollMode.AUTO, spacing=6)
    search = ft.TextField(hint_text="Search dishes", prefix_icon=ft.Icons.SEARCH, on_change=on_search,
                          border_radius=12, height=45, text_size=14)

    for dish in filter_dishes(dishes):
        grid.controls.append(dish_card(dish))

    return ft.Column([
        ft.Container(content=ft.Text("Menu", size=20, weight="bold"), padding=ft.padding.only(top=15, left=15)),
        ft.Container(content=search, padding=ft.padding.symmetric(horizontal=10)),
        ft.Container(content=chips, padding=ft.padding.symmetric(horizontal=10)),
        ft.Container(content=grid, expand=True, padding=10, bgcolor="grey100"),
    ], expand=True, spacing=6)
