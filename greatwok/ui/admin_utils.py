"""
Shared utility functions for the client views
"""
import flet as ft

from greatwok.ui.admin_constants import STATUS_COLORS

DONE = "Done Preparing"


def kitchen_sort(items):
    """Finished items sink to the bottom; everything else stays in order_id order."""
    return sorted(items, key=lambda i: (i.get("status") == DONE, i.get("order_id") or 0, i.get("order_item_id") or 0))


def filter_dishes(dishes, search: str = "", category_id=None):
    """Menu search: case-insensitive match on name or description, optional category."""
    needle = (search or "").strip().lower()
    result = []
    for dish in dishes:
        if category_id is not None and dish.get("category_id") != category_id:
            continue
        haystack = f"{dish.get('dish_name') or ''} {dish.get('description') or ''}".lower()
        if needle and needle not in haystack:
            continue
        result.append(dish)
    return result


def next_status(status: str):
    """The status the kitchen button moves to, or None when finished."""
    if status == "Pending":
        return "In Progress"
    if status == "In Progress":
        return DONE
    return None


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, "grey")


def show_snack(page, text: str, ok: bool = True):
    page.snack_bar = ft.SnackBar(ft.Text(text), bgcolor=ft.Colors.GREEN if ok else ft.Colors.RED)
    page.snack_bar.open = True
    page.update()


def close_dialog(page, dialog):
    """Close a dialog and update the page"""
    dialog.open = False
    page.update()


def open_dialog(page, dialog):
    page.overlay.append(dialog)
    dialog.open = True
    page.update()
