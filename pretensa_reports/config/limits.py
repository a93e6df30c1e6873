"""
Layout limits shared by the spreadsheet and document renderers.

Spreadsheet widths are expressed in Excel character widths; document
geometry is expressed in millimetres measured from the top of the page.
"""

from __future__ import annotations

# --- Spreadsheet (character widths) -----------------------------------------

SHEET_MIN_COLUMN_WIDTH = 12
SHEET_MAX_COLUMN_WIDTH = 60
SHEET_COLUMN_PADDING = 4

# Excel limits a worksheet title to 31 characters
SHEET_TITLE_MAX_LEN = 31

# --- Document (millimetres) ---------------------------------------------------

PAGE_MARGIN_MM = 20.0
HEADER_BAND_HEIGHT_MM = 50.0
TITLE_Y_MM = 60.0
SUBTITLE_GAP_MM = 10.0
META_GAP_MM = 15.0
TABLE_GAP_MM = 20.0

DOC_MIN_COLUMN_WIDTH_MM = 25.0
DOC_COLUMN_PADDING_MM = 12.0
# A single column may not claim more than this share of the drawable width
# because of its content alone (its label may still require more).
DOC_CONTENT_SHARE = 0.4
CELL_INNER_PADDING_MM = 6.0

TABLE_HEADER_HEIGHT_MM = 12.0
# Band is drawn 5 mm above the cursor; rows start 15 mm below it.
TABLE_HEADER_OFFSET_MM = 5.0
TABLE_HEADER_ADVANCE_MM = 15.0
ROW_HEIGHT_MM = 8.0
ROW_BAND_OFFSET_MM = 2.0
FOOTER_RESERVE_MM = 40.0
FOOTER_Y_FROM_BOTTOM_MM = 15.0

# --- Fonts -------------------------------------------------------------------

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"
FONT_ITALIC = "Helvetica-Oblique"

HEADER_FONT_SIZE = 11
CELL_FONT_SIZE = 9
FOOTER_FONT_SIZE = 8

ELLIPSIS = "..."

# Floating-point tolerance
EPS = 1e-6
