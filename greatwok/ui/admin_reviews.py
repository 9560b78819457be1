"""
Reviews Tab for Admin Panel
"""
import flet as ft

from greatwok.ui.api_client import ApiError
from greatwok.ui.admin_utils import show_snack


def build_reviews_tab(page: ft.Page, api, is_desktop: bool):
    reviews_list = ft.Column(spacing=8, scroll=ft.ScrollMode.AUTO, expand=True)

    def delete_review(review):
        try:
            api.delete_review(review["review_id"])
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        load_reviews()
        show_snack(page, "Review deleted")

    def build_review_card(review):
        stars = "★" * review["rating"] + "☆" * (5 - review["rating"])
        return ft.Card(
            content=ft.Container(
                padding=10,
                bgcolor="white",
                border_radius=12,
                content=ft.Row([
                    ft.Column([
                        ft.Text(f"{review.get('dish_name')} - {stars}", weight="bold"),
                        ft.Text(review.get("comment") or "", size=12),
                        ft.Text(f"by {review.get('username')}", size=11, color="grey700"),
                    ], spacing=2, expand=True),
                    ft.IconButton(icon=ft.Icons.DELETE, icon_color="red",
                                  on_click=lambda e, r=review: delete_review(r)),
                ])
            )
        )

    def load_reviews():
        try:
            reviews = api.list_reviews()
        except ApiError as ex:
            show_snack(page, ex.message, ok=False)
            return
        reviews_list.controls = [build_review_card(r) for r in reviews] or [ft.Text("No reviews yet.")]
        page.update()

    load_reviews()

    return ft.Tab(
        text="Reviews",
        icon=ft.Icons.RATE_REVIEW,
        content=ft.Column([
            ft.Container(content=ft.Text("Reviews", size=20, weight="bold"), padding=10),
            ft.Container(content=reviews_list, expand=True, padding=10),
        ], expand=True, spacing=0)
    )
