"""
Dishes Management Tab for Admin Panel
"""
import logging
import mimetypes
import os

import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_constants import DESKTOP_COLUMNS, GRID_SPACING, GRID_RUN_SPACING
from greatwok.ui.admin_utils import show_snack, open_dialog, close_dialog

logger = logging.getLogger(__name__)


def build_dishes_tab(page: ft.Page, api, is_desktop: bool):
    """
    Build the Dishes management tab

    Args:
        page: Flet page object
        api: ApiClient bound to the admin's session
        is_desktop: True if desktop layout, False if mobile

    Returns:
        ft.Tab: dish list with add / edit / delete and image upload
    """
    state = {"categories": []}

    dishes_grid = ft.GridView(runs_count=DESKTOP_COLUMNS, max_extent=500, child_aspect_ratio=3.2,
                              spacing=GRID_SPACING, run_spacing=GRID_RUN_SPACING, expand=True)
    dishes_list = ft.Column(spacing=10, scroll=ft.ScrollMode.AUTO, expand=True)
    container = dishes_grid if is_desktop else dishes_list

    file_picker = ft.FilePicker()
    page.overlay.append(file_picker)

    def category_name(category_id):
        for c in state["categories"]:
            if c["category_id"] == category_id:
                return c["category_name"]
        return "Uncategorised"

    # ===================== DISH FORM =====================

    def open_form(dish=None):
        name = ft.TextField(label="Dish name", value=dish["dish_name"] if dish else "", width=320)
        description = ft.TextField(label="Description", value=(dish or {}).get("description") or "",
                                   multiline=True, width=320)
        price = ft.TextField(label="Price", value=f"{dish['price']:.2f}" if dish else "", width=150,
                             keyboard_type=ft.KeyboardType.NUMBER)
        category = ft.Dropdown(
            label="Category", width=200,
            options=[ft.dropdown.Option(key=str(c["category_id"]), text=c["category_name"]) for c in state["categories"]],
            value=str(dish["category_id"]) if dish and dish.get("category_id") else None,
        )
        available = ft.Checkbox(label="Available", value=dish["is_available"] if dish else True)
        image_url = ft.TextField(label="Image URL", value=(dish or {}).get("image_url") or "", width=320)
        message = ft.Text("", color="red", size=12)

        def on_pick(e: ft.FilePickerResultEvent):
            if not e.files:
                return
            path = e.files[0].path
            try:
                with open(path, "rb") as fh:
                    data = fh.read()
                content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"
                image_url.value = api.upload_image(os.path.basename(path), data, content_type)
                message.value = ""
            except ApiError as ex:
                message.value = ex.message
            except OSError as ex:
                logger.error("Could not read %s: %s", path, ex)
                message.value = "Could not read the selected file"
            page.update()

        file_picker.on_result = on_pick

        def save(e):
            body = {
                "dish_name": (name.value or "").strip(),
                "description": (description.value or "").strip() or None,
                "price": (price.value or "").strip(),
                "category_id": int(category.value) if category.value else None,
                "is_available": available.value,
            }
            if (image_url.value or "").strip():
                body["image_url"] = image_url.value.strip()
            try:
                if dish:
                    api.update_dish(dish["dish_id"], body)
                else:
                    api.create_dish(body)
            except ApiError as ex:
                message.value = ex.message
                page.update()
                return
            close_dialog(page, dlg)
            load_dishes()
            show_snack(page, "Dish saved")

        dlg = ft.AlertDialog(
            modal=True,
            title=ft.Text("Edit Dish" if dish else "Add Dish"),
            content=ft.Column([
                name, description, ft.Row([price, category]), available, image_url,
                ft.TextButton("Upload image", icon=ft.Icons.UPLOAD,
                              on_click=lambda e: file_picker.pick_files(allow_multiple=False,
                                                                        file_type=ft.FilePickerFileType.IMAGE)),
                message,
            ], tight=True, scroll=ft.ScrollMode.AUTO),
            actions=[
                ft.TextButton("Cancel", on_click=lambda e: close_dialog(page, dlg)),
                ft.ElevatedButton("Save", on_click=save),
            ],
        )
        open_dialog(page, dlg)

    def delete_dish(dish):
        try:
            api.delete_dish(dish["dish_id"])
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        load_dishes()
        show_snack(page, f"{dish['dish_name']} deleted")

    # ===================== CARD BUILDER =====================

    def build_dish_card(dish):
        return ft.Card(
            content=ft.Container(
                content=ft.Column([
                    ft.Row([
                        ft.Text(dish["dish_name"], weight="bold", size=14),
                        ft.Text(f"${dish['price']:.2f}", color="green", weight="bold"),
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                    ft.Text(category_name(dish.get("category_id")), size=12, color="grey700"),
                    ft.Row([
                        ft.Text("Available" if dish["is_available"] else "Unavailable", size=12,
                                color="green" if dish["is_available"] else "red"),
                        ft.Row([
                            ft.IconButton(icon=ft.Icons.EDIT, on_click=lambda e, d=dish: open_form(d)),
                            ft.IconButton(icon=ft.Icons.DELETE, icon_color="red", on_click=lambda e, d=dish: delete_dish(d)),
                        ], spacing=0),
                    ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                ], spacing=3),
                padding=10,
                bgcolor="white",
                border_radius=12
            )
        )

    # ===================== LOAD DATA =====================

    def load_dishes():
        try:
            state["categories"] = api.list_categories()
            dishes = api.list_dishes()
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        container.controls = [build_dish_card(d) for d in dishes]
        page.update()

    load_dishes()

    return ft.Tab(
        text="Dishes",
        icon=ft.Icons.RESTAURANT_MENU,
        content=ft.Column([
            ft.Container(
                content=ft.Row([
                    ft.Text("Manage Dishes", size=20, weight="bold"),
                    ft.ElevatedButton("Add Dish", icon=ft.Icons.ADD, on_click=lambda e: open_form()),
                ], alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
                padding=10
            ),
            ft.Container(content=container, expand=True, padding=10),
        ], expand=True, spacing=0)
    )
