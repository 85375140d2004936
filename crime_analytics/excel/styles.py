"""
Colors, fonts, fills, borders and alignments for the crime workbook.
"""
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------
NAVY = "102A43"
POLICE_BLUE = "1F3A5F"
PALE_BLUE = "E3ECF7"
STRIPE = "F4F6F8"
TOTAL_BG = "DCE6F2"
FLAG_RED = "FDE2E1"
GRID = "C5CED8"
MUTED = "5C6B7A"
INK = "1B1B1B"
WHITE = "FFFFFF"


def _font(size: int, **kw) -> Font:
    return Font(name="Calibri", size=size, **kw)


def _fill(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


# ---------------------------------------------------------------------------
# Fonts
# ---------------------------------------------------------------------------
TITLE_FONT = _font(22, bold=True, color=NAVY)
SUBTITLE_FONT = _font(11, italic=True, color=MUTED)
SECTION_FONT = _font(13, bold=True, color=POLICE_BLUE)
HEADER_FONT = _font(11, bold=True, color=WHITE)
DATA_FONT = _font(10, color=INK)
TOTAL_FONT = _font(10, bold=True, color=INK)
KPI_VALUE_FONT = _font(26, bold=True, color=POLICE_BLUE)
KPI_LABEL_FONT = _font(9, color=MUTED)
NOTE_TITLE_FONT = _font(10, bold=True, color=MUTED)
NOTE_BODY_FONT = _font(10, italic=True, color=MUTED)
LEGEND_TERM_FONT = _font(10, bold=True, color=POLICE_BLUE)

# ---------------------------------------------------------------------------
# Fills
# ---------------------------------------------------------------------------
HEADER_FILL = _fill(NAVY)
STRIPE_FILL = _fill(STRIPE)
TOTAL_FILL = _fill(TOTAL_BG)
LEGEND_FILL = _fill(PALE_BLUE)
# rows carrying unparseable values on the quality sheet
FLAG_FILL = _fill(FLAG_RED)

# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------
_thin = Side(style="thin", color=GRID)
GRID_BORDER = Border(left=_thin, right=_thin, top=_thin, bottom=_thin)
HEADER_BORDER = Border(bottom=Side(style="medium", color=POLICE_BLUE))
TOTAL_BORDER = Border(top=Side(style="medium", color=POLICE_BLUE), bottom=_thin)

# ---------------------------------------------------------------------------
# Alignments
# ---------------------------------------------------------------------------
CENTER = Alignment(horizontal="center", vertical="center")
LEFT = Alignment(horizontal="left", vertical="center")
RIGHT = Alignment(horizontal="right", vertical="center")
WRAP = Alignment(horizontal="left", vertical="top", wrap_text=True)
