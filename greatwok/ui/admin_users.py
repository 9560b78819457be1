"""
Users Tab for Admin Panel
"""
import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_utils import show_snack

ROLE_COLORS = {"admin": "red", "user": "blue", "guest": "grey"}


def build_users_tab(page: ft.Page, api, is_desktop: bool):
    users_list = ft.Column(spacing=8, scroll=ft.ScrollMode.AUTO, expand=True)
    search = ft.TextField(hint_text="Search by name or email", prefix_icon=ft.Icons.SEARCH, height=45,
                          on_change=lambda e: render())
    state = {"users": []}

    def build_user_card(user):
        return ft.Card(
            content=ft.Container(
                padding=10,
                bgcolor="white",
                border_radius=12,
                content=ft.Row([
                    ft.Column([
                        ft.Text(user["username"], weight="bold"),
                        ft.Text(user.get("email") or "guest", size=12, color="grey700"),
                        ft.Text(user.get("phone") or "", size=11, color="grey700"),
                    ], spacing=2, expand=True),
                    ft.Container(content=ft.Text(user["role"], color="white", size=12),
                                 bgcolor=ROLE_COLORS.get(user["role"], "grey"), padding=5, border_radius=5),
                ])
            )
        )

    def render():
        needle = (search.value or "").strip().lower()
        shown = [u for u in state["users"]
                 if not needle or needle in f"{u['username']} {u.get('email') or ''}".lower()]
        users_list.controls = [build_user_card(u) for u in shown]
        page.update()

    def load_users():
        try:
            state["users"] = api.list_users()
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        render()

    load_users()

    return ft.Tab(
        text="Users",
        icon=ft.Icons.PEOPLE,
        content=ft.Column([
            ft.Container(content=ft.Text("Users", size=20, weight="bold"), padding=10),
            ft.Container(content=search, padding=ft.padding.symmetric(horizontal=10)),
            ft.Container(content=users_list, expand=True, padding=10),
        ], expand=True, spacing=0)
    )
