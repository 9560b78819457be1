"""
Categories Management Tab for Admin Panel
"""
import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_utils import show_snack


def build_categories_tab(page: ft.Page, api, is_desktop: bool):
    categories_list = ft.Column(spacing=6, scroll=ft.ScrollMode.AUTO, expand=True)
    new_name = ft.TextField(label="New category", width=250, height=50)

    def run(action, success):
        try:
            action()
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return False
        load_categories()
        show_snack(page, success)
        return True

    def add_category(e):
        if run(lambda: api.create_category((new_name.value or "").strip()), "Category added"):
            new_name.value = ""
            page.update()

    def build_row(category):
        name = ft.TextField(value=category["category_name"], expand=True, height=45, text_size=13)
        cid = category["category_id"]
        return ft.Row([
            name,
            ft.IconButton(icon=ft.Icons.SAVE, tooltip="Rename",
                          on_click=lambda e: run(lambda: api.update_category(cid, (name.value or "").strip()),
                                                 "Category renamed")),
            ft.IconButton(icon=ft.Icons.DELETE, icon_color="red", tooltip="Delete",
                          on_click=lambda e: run(lambda: api.delete_category(cid), "Category deleted")),
        ])

    def load_categories():
        try:
            categories = api.list_categories()
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        categories_list.controls = [build_row(c) for c in categories]
        page.update()

    load_categories()

    return ft.Tab(
        text="Categories",
        icon=ft.Icons.CATEGORY,
        content=ft.Column([
            ft.Container(content=ft.Text("Manage Categories", size=20, weight="bold"), padding=10),
            ft.Container(content=ft.Row([new_name, ft.ElevatedButton("Add", on_click=add_category)]), padding=10),
            ft.Container(content=categories_list, expand=True, padding=10),
        ], expand=True, spacing=0)
    )
