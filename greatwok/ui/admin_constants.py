"""
Shared constants for admin panel components
"""

# ===== RESPONSIVE LAYOUT CONSTANTS =====
BREAKPOINT = 800  # Mobile vs Desktop threshold (px)

DESKTOP_COLUMNS = 3
GRID_SPACING = 10
GRID_RUN_SPACING = 10

# ===== BRAND COLORS =====
ORANGE = "#FF6B35"
YELLOW = "#FEB23F"
RED = "#E9190A"
LIGHT_GRAY = "#D9D9D9"
WHITE = "#FFFFFF"

# Order / order item statuses
STATUS_COLORS = {
    "Pending": "orange",
    "In Progress": "blue",
    "Done Preparing": "green",
}
