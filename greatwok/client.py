import logging

import flet as ft

from greatwok.core.logger import configure_logging
from greatwok.ui.api_client import ApiClient
from greatwok.ui.client_store import ClientStore
from greatwok.ui.admin_utils import show_snack
from greatwok.ui.login_view import login_view
from greatwok.ui.signup_view import signup_view
from greatwok.ui.home_view import home_view
from greatwok.ui.admin_view import admin_view

logger = logging.getLogger(__name__)

PUBLIC_ROUTES = ["/", "/login", "/signup", "/logout"]


def main(page: ft.Page):
    page.window.width = 400
    page.window.height = 700
    page.padding = 0
    page.spacing = 0
    page.title = "The Great Wok"
    page.horizontal_alignment = ft.CrossAxisAlignment.CENTER
    page.vertical_alignment = ft.MainAxisAlignment.START

    store = ClientStore(page.client_storage)
    store.hydrate()
    api = ApiClient(store)

    def route_change(e):
        page.clean()

        if page.route not in PUBLIC_ROUTES and not store.is_authenticated:
            # also reached after the API answered 401 and the store was cleared
            show_snack(page, "Please log in to continue.", ok=False)
            page.go("/login")
            return

        if page.route == "/logout":
            store.clear()
            show_snack(page, "You have been logged out.")
            page.go("/login")
            return

        if page.route in ("/", "/login"):
            if store.is_authenticated:
                page.go("/admin" if store.is_admin else "/home")
                return
            login_view(page, api)
        elif page.route == "/signup":
            signup_view(page, api)
        elif page.route == "/home":
            home_view(page, api)
        elif page.route == "/admin":
            admin_view(page, api)
        else:
            logger.info("Unknown route %s", page.route)
            page.go("/login")

    page.on_route_change = route_change
    page.go(page.route or "/")


def run():
    configure_logging()
    ft.app(target=main)


if __name__ == "__main__":
    run()
