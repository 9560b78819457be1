import logging

import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_constants import ORANGE, YELLOW, LIGHT_GRAY, WHITE
from greatwok.ui.admin_utils import show_snack

logger = logging.getLogger(__name__)

MOBILE_WIDTH = 350


def _field(label, icon, password=False):
    return ft.TextField(
        label=label,
        password=password,
        can_reveal_password=password,
        width=MOBILE_WIDTH,
        border_radius=12,
        filled=True,
        bgcolor=LIGHT_GRAY,
        border_color="transparent",
        focused_border_color=ORANGE,
        prefix_icon=icon,
        text_size=14,
        height=55
    )


def login_view(page: ft.Page, api):
    page.title = "Login - The Great Wok"

    email = _field("Email Address", ft.Icons.EMAIL_OUTLINED)
    password = _field("Password", ft.Icons.LOCK_OUTLINE, password=True)
    message = ft.Text(value="", color="red", size=12, text_align=ft.TextAlign.CENTER)

    def complete_login(user):
        show_snack(page, f"Welcome, {user['username']}!")
        page.go("/admin" if user.get("role") == "admin" else "/home")

    def handle_login(e):
        email_val = (email.value or "").strip()
        pwd_val = password.value or ""
        if not email_val or not pwd_val:
            message.value = "Please enter email and password"
            page.update()
            return
        try:
            complete_login(api.login(email_val, pwd_val))
        except ApiError as ex:
            message.value = ex.message
            page.update()

    def handle_guest(e):
        try:
            complete_login(api.guest_login())
        except ApiError as ex:
            logger.warning("Guest login failed: %s", ex.message)
            message.value = ex.message
            page.update()

    login_btn = ft.Container(
        content=ft.Text("Sign In", size=18, weight="bold", color=WHITE),
        width=MOBILE_WIDTH,
        height=50,
        bgcolor=YELLOW,
        border_radius=12,
        alignment=ft.alignment.center,
        on_click=handle_login,
        ink=True
    )
    guest_btn = ft.Container(
        content=ft.Text("Continue as Guest", size=14, color="#000000", weight="w500"),
        width=MOBILE_WIDTH,
        height=50,
        bgcolor=LIGHT_GRAY,
        border_radius=12,
        alignment=ft.alignment.center,
        on_click=handle_guest,
        ink=True
    )
    signup_row = ft.Row([
        ft.Text("Don't have an account?", size=13),
        ft.Container(
            content=ft.Text("Sign Up", size=13, color=ORANGE, weight="bold"),
            on_click=lambda e: page.go("/signup"),
            ink=True
        )
    ], spacing=5, alignment=ft.MainAxisAlignment.CENTER)

    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([
                ft.Container(height=30),
                ft.Text("Welcome back!!!", size=22, weight="bold"),
                ft.Text("Sign in to order from The Great Wok", size=12, color="grey700"),
                ft.Container(height=25),
                email,
                ft.Container(height=8),
                password,
                ft.Container(height=20),
                login_btn,
                ft.Container(height=4),
                message,
                ft.Container(height=20),
                guest_btn,
                ft.Container(height=8),
                signup_row,
            ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, scroll=ft.ScrollMode.AUTO, spacing=0),
            width=400,
            expand=True,
            padding=ft.padding.symmetric(horizontal=25),
            bgcolor=WHITE,
            alignment=ft.alignment.center
        )
    )
    page.update()
