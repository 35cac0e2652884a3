"""
Single source of truth for all Excel colors, fonts, fills, borders, alignments.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Color constants
# ---------------------------------------------------------------------------
DARK_NAVY = "14263F"
LIGHT_BLUE = "E8EEF6"
HEADER_BG = "14263F"
ALTERNATE_ROW = "F5F5F5"
WHITE = "FFFFFF"
BLACK = "000000"
GREEN = "2E7D32"
LIGHT_GREEN = "E8F5E9"
RED = "D32F2F"
LIGHT_RED = "FFEBEE"
GRAY_666 = "666666"

# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = Font(name="Calibri", size=24, bold=True, color=DARK_NAVY)
SUBTITLE_FONT = Font(name="Calibri", size=12, italic=True, color=GRAY_666)
HEADER_FONT = Font(name="Calibri", size=11, bold=True, color=WHITE)
DATA_FONT = Font(name="Calibri", size=10, color=BLACK)
PLACEHOLDER_FONT = Font(name="Calibri", size=10, color=GRAY_666)
SECTION_FONT = Font(name="Calibri", size=14, bold=True, color=DARK_NAVY)
KPI_VALUE_FONT = Font(name="Calibri", size=28, bold=True, color=DARK_NAVY)
KPI_LABEL_FONT = Font(name="Calibri", size=10, color=GRAY_666)
POSITIVE_KPI_FONT = Font(name="Calibri", size=28, bold=True, color=GREEN)
NEGATIVE_KPI_FONT = Font(name="Calibri", size=28, bold=True, color=RED)
INSIGHT_TITLE_FONT = Font(name="Calibri", size=11, bold=True)
INSIGHT_BODY_FONT = Font(name="Calibri", size=10, italic=True)
LEGEND_BOLD_FONT = Font(name="Calibri", size=10, bold=True)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = PatternFill(start_color=HEADER_BG, end_color=HEADER_BG, fill_type="solid")
LIGHT_BLUE_FILL = PatternFill(start_color=LIGHT_BLUE, end_color=LIGHT_BLUE, fill_type="solid")
ALTERNATE_FILL = PatternFill(start_color=ALTERNATE_ROW, end_color=ALTERNATE_ROW, fill_type="solid")
GAIN_FILL = PatternFill(start_color=LIGHT_GREEN, end_color=LIGHT_GREEN, fill_type="solid")
LOSS_FILL = PatternFill(start_color=LIGHT_RED, end_color=LIGHT_RED, fill_type="solid")

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
THIN_BORDER = Border(
    left=Side(style="thin", color="CCCCCC"),
    right=Side(style="thin", color="CCCCCC"),
    top=Side(style="thin", color="CCCCCC"),
    bottom=Side(style="thin", color="CCCCCC"),
)
HEADER_BORDER = Border(
    left=Side(style="thin", color=DARK_NAVY),
    right=Side(style="thin", color=DARK_NAVY),
    top=Side(style="thin", color=DARK_NAVY),
    bottom=Side(style="medium", color=DARK_NAVY),
)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
WRAP = Alignment(horizontal="left", vertical="center", wrap_text=True)

# ---------------------------------------------------------------------------
# Number formats by column type
# ---------------------------------------------------------------------------
NUMBER_FORMATS = {
    "return": "0.0%",          # fraction, 0.123 → 12.3%
    "percent": '0.00"%"',      # already x100, -10.5 → -10.50%
    "number": "#,##0",
    "decimal": "#,##0.00",
    "date": "yyyy-mm-dd",
}

# ---------------------------------------------------------------------------
# Highlight name → fill mapping
# ---------------------------------------------------------------------------
HIGHLIGHT_FILLS = {
    "gain": GAIN_FILL,
    "loss": LOSS_FILL,
}
