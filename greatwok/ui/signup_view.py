import flet as ft

from greatwok.core.schemas import MAX_PASSWORD_BYTES, is_valid_email, is_valid_phone
from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_constants import YELLOW, WHITE
from greatwok.ui.admin_utils import show_snack
from greatwok.ui.login_view import _field, MOBILE_WIDTH


def validate_signup(username, email, password, confirm, phone):
    """Same rules the API enforces; returns an error message or None."""
    if len(username.strip()) < 3:
        return "Username must be at least 3 characters long"
    if not is_valid_email(email.strip()):
        return "Please enter a valid email"
    if len(password) < 6:
        return "Password must be at least 6 characters long"
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
    if password != confirm:
        return "Passwords do not match"
    if phone and not is_valid_phone(phone):
        return "Please enter a valid phone number"
    return None


def signup_view(page: ft.Page, api):
    page.title = "Sign Up - The Great Wok"

    username = _field("Username", ft.Icons.PERSON_OUTLINE)
    email = _field("Email Address", ft.Icons.EMAIL_OUTLINED)
    phone = _field("Phone (optional)", ft.Icons.PHONE_OUTLINED)
    password = _field("Password", ft.Icons.LOCK_OUTLINE, password=True)
    confirm = _field("Confirm Password", ft.Icons.LOCK_OUTLINE, password=True)
    message = ft.Text(value="", color="red", size=12, text_align=ft.TextAlign.CENTER)

    def handle_signup(e):
        values = [(f.value or "") for f in (username, email, password, confirm, phone)]
        error = validate_signup(*values)
        if error:
            message.value = error
            page.update()
            return
        try:
            user = api.signup(values[0].strip(), values[1].strip(), values[2], values[4].strip() or None)
        except ApiError as ex:
            message.value = ex.message
            page.update()
            return
        show_snack(page, f"Account created. Welcome, {user['username']}!")
        page.go("/home")

    page.clean()
    page.add(
        ft.Container(
            content=ft.Column([
                ft.Container(height=20),
                ft.Text("Create your account", size=22, weight="bold"),
                ft.Container(height=20),
                username, email, phone, password, confirm,
                ft.Container(height=12),
                ft.Container(
                    content=ft.Text("Sign Up", size=18, weight="bold", color=WHITE),
                    width=MOBILE_WIDTH,
                    height=50,
                    bgcolor=YELLOW,
                    border_radius=12,
                    alignment=ft.alignment.center,
                    on_click=handle_signup,
                    ink=True
                ),
                message,
                ft.TextButton("Back to login", on_click=lambda e: page.go("/login")),
            ], horizontal_alignment=ft.CrossAxisAlignment.CENTER, scroll=ft.ScrollMode.AUTO, spacing=8),
            width=400,
            expand=True,
            padding=ft.padding.symmetric(horizontal=25),
            bgcolor=WHITE,
            alignment=ft.alignment.center
        )
    )
    page.update()
