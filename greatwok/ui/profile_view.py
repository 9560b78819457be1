import flet as ft

from greatwok.core.schemas import is_valid_phone
from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_utils import show_snack


def profile_view_widget(page: ft.Page, api, on_logout):
    """Profile tab: account details, phone number and address book."""
    try:
        user = api.get_profile()
        addresses = api.list_addresses()
    except ApiError as ex:
        return ft.Container(content=ft.Text(f"Could not load profile: {ex.message}", color="red"), padding=20)

    phone = ft.TextField(label="Phone", value=user.get("phone") or "", width=250)
    address_list = ft.Column(spacing=6)
    fields = {
        name: ft.TextField(label=label, width=300, height=50, text_size=13)
        for name, label in (("address_line", "Address"), ("city", "City"), ("state", "State"),
                            ("country", "Country"), ("postal_code", "Postal code"))
    }

    def save_phone(e):
        value = (phone.value or "").strip()
        if not is_valid_phone(value):
            show_snack(page, "Please enter a valid phone number", ok=False)
            return
        try:
            api.update_phone(value)
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        show_snack(page, "Phone number updated")

    def address_rows():
        if not addresses:
            return [ft.Text("No saved addresses.", color="grey700")]
        return [ft.Row([
            ft.Text(f"{a['address_line']}, {a['city']}, {a['state']} {a['postal_code']}, {a['country']}",
                    expand=True, size=12),
            ft.IconButton(icon=ft.Icons.DELETE, icon_color="red", on_click=lambda e, x=a: remove_address(x)),
        ]) for a in addresses]

    def render_addresses():
        address_list.controls = address_rows()
        page.update()

    def add_address(e):
        values = {k: (f.value or "").strip() for k, f in fields.items()}
        if not all(values.values()):
            show_snack(page, "All address fields are required", ok=False)
            return
        try:
            addresses.append(api.create_address(**values))
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        for f in fields.values():
            f.value = ""
        render_addresses()

    def remove_address(address):
        try:
            api.delete_address(address["address_id"])
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        addresses.remove(address)
        render_addresses()

    address_list.controls = address_rows()

    return ft.Column([
        ft.Container(content=ft.Text("Profile", size=20, weight="bold"), padding=ft.padding.only(top=15, left=15)),
        ft.Container(
            content=ft.Column([
                ft.Text(user["username"], size=16, weight="bold"),
                ft.Text(user.get("email") or "Guest account", color="grey700"),
                ft.Row([phone, ft.ElevatedButton("Save", on_click=save_phone)]),
                ft.Divider(),
                ft.Text("Addresses", size=16, weight="bold"),
                address_list,
                *fields.values(),
                ft.ElevatedButton("Add address", icon=ft.Icons.ADD, on_click=add_address),
                ft.Divider(),
                ft.ElevatedButton("Logout", icon=ft.Icons.LOGOUT, on_click=on_logout),
            ], spacing=8),
            padding=15
        ),
    ], expand=True, scroll=ft.ScrollMode.AUTO, spacing=0)
