# reports/config.py
import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()

# All layout values are millimetres, origin at the top-left corner (A4).
PAGE_WIDTH = 210.0
PAGE_HEIGHT = 297.0

MARGIN_LEFT = 14.0
CONTENT_RIGHT = 196.0
CONTENT_WIDTH = CONTENT_RIGHT - MARGIN_LEFT   # 182
TOP_MARGIN = 20.0                             # cursor after a page break
BOTTOM_MARGIN = 14.0                          # tables never draw below this

# Masthead
ORG_NAME = "SUMA - Sistema Unificado de Medicina Avanzada"
LOGO_PATH = Path(os.getenv("REPORT_LOGO_PATH", Path(__file__).parent / "assets" / "logo.png"))
LOGO_BOX = (14.0, 15.0, 10.0, 10.0)           # x, y, w, h
ORG_NAME_POS = (28.0, 22.0)
TITLE_POS = (14.0, 40.0)
SUBTITLE_POS = (14.0, 46.0)

# Cursor
CURSOR_START = 55.0
PAGE_BREAK_THRESHOLD = 40.0
HEADING_RULE_GAP = 2.0
RULE_TABLE_GAP = 8.0
POST_TABLE_GAP = 15.0

# Fonts (points)
FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
ORG_NAME_SIZE = 20
TITLE_SIZE = 16
SUBTITLE_SIZE = 10
HEADING_SIZE = 14
TABLE_FONT_SIZE = 10

# Striped table theme
HEADER_FILL = (41, 128, 185)
STRIPE_FILL = (245, 245, 245)
CELL_PADDING = 5  # points

# Deterministic PDF bytes (no creation date / random document id)
PDF_INVARIANT = os.getenv("REPORT_PDF_INVARIANT", "true").lower() in ("1", "true", "yes")
