"""
Constants for ARB Translation Assistant
"""

# Default settings
DEFAULT_FILE_PRIORITY = True
DEFAULT_PAGE_SIZE = 25
SEARCH_DEBOUNCE_MS = 300
MAX_VISIBLE_PAGES = 5

# UI Strings
APP_TITLE = "ARB Translation Assistant"
DEFAULT_WINDOW_SIZE = "1400x900"

# File types
ARB_EXTENSIONS = [("ARB files", "*.arb"), ("All files", "*.*")]
XLSX_EXTENSIONS = [("Excel files", "*.xlsx"), ("All files", "*.*")]
ZIP_EXTENSIONS = [("Zip archives", "*.zip"), ("All files", "*.*")]

# Default output names
EXCEL_EXPORT_NAME = "arb_export"
ARB_ARCHIVE_NAME = "arb_files"

# Spreadsheet layout
SHEET_TITLE = "labels"
CONTEXT_HEADER = "Context"
KEY_HEADER = "Key"
DESCRIPTION_HEADER = "Description"
FIRST_LOCALE_COLUMN = 3  # Zero-based index of the first locale column
HEADER_FILL_COLOR = "4472C4"
HEADER_FONT_COLOR = "FFFFFF"
CONTEXT_COLUMN_WIDTH = 30
KEY_COLUMN_WIDTH = 35
DESCRIPTION_COLUMN_WIDTH = 20
LOCALE_COLUMN_WIDTH = 40

# ARB documents
ARB_LOCALE_KEY = "@@locale"
ARB_METADATA_PREFIX = "@"
ARB_FILE_TEMPLATE = "intl_{locale}.arb"

# Text formatting tags
TAG_MODIFIED = "modified"
TAG_ODD_ROW = "odd_row"

# Colors
COLOR_MODIFIED_BG = "#e6ffe6"
COLOR_ODD_ROW_BG = "#f5f7fc"
COLOR_MUTED_FG = "gray"

# Fonts
FONT_ARIAL = ("Arial", 11)
FONT_ARIAL_BOLD = ("Arial", 11, "bold")

# Table column widths (pixels)
TABLE_KEY_WIDTH = 220
TABLE_LOCALE_WIDTH = 320
