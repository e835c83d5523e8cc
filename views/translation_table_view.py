"""
Translation Table View for ARB Translation Assistant

Paginated key x locale table with in-place editing.
"""

import logging
import tkinter as tk
from tkinter import ttk, scrolledtext
from tkinter.font import Font

from constants import (
    TAG_MODIFIED, TAG_ODD_ROW, COLOR_MODIFIED_BG, COLOR_ODD_ROW_BG,
    COLOR_MUTED_FG, TABLE_KEY_WIDTH, TABLE_LOCALE_WIDTH
)
from locale_flags import locale_to_flag
from pagination import Paginator
from .base_view import BaseView

logger = logging.getLogger(__name__)


class TranslationTableView(BaseView):
    """View showing one page of translation keys"""

    def __init__(self, parent_frame, app, store, page_size):
        super().__init__(parent_frame, app, store)
        self.page_size = page_size
        self.search_query = ''
        self.current_page = 0
        self.page_keys = []
        self.locales = []

    def create(self):
        """Create the table UI"""
        self.container = ttk.Frame(self.parent_frame)
        self.container.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)

        # Treeview with scrollbars
        tree_frame = ttk.Frame(self.container)
        tree_frame.pack(fill=tk.BOTH, expand=True)

        vsb = ttk.Scrollbar(tree_frame, orient="vertical")
        hsb = ttk.Scrollbar(tree_frame, orient="horizontal")
        self.tree = ttk.Treeview(tree_frame, show="headings",
                                 yscrollcommand=vsb.set, xscrollcommand=hsb.set)
        vsb.config(command=self.tree.yview)
        hsb.config(command=self.tree.xview)

        self.tree.grid(row=0, column=0, sticky="nsew")
        vsb.grid(row=0, column=1, sticky="ns")
        hsb.grid(row=1, column=0, sticky="ew")
        tree_frame.grid_rowconfigure(0, weight=1)
        tree_frame.grid_columnconfigure(0, weight=1)

        self.tree.tag_configure(TAG_MODIFIED, background=COLOR_MODIFIED_BG)
        self.tree.tag_configure(TAG_ODD_ROW, background=COLOR_ODD_ROW_BG)

        self.tree.bind("<Double-1>", self.on_cell_double_click)
        self.tree.bind("<ButtonRelease-1>", self.on_cell_click)

        # Cell details (source file or original value)
        self.cell_info_var = tk.StringVar(value="")
        ttk.Label(self.container, textvariable=self.cell_info_var,
                  foreground=COLOR_MUTED_FG).pack(anchor=tk.W, pady=(5, 0))

        # Pagination bar
        self.pagination_frame = ttk.Frame(self.container)
        self.pagination_frame.pack(pady=(10, 0))

    def set_search_query(self, query):
        """Filter rows by query and go back to the first page"""
        if query != self.search_query:
            logger.debug("Search query updated: %r", query)
            self.search_query = query
            self.current_page = 0
            self.update()

    def go_to_page(self, page):
        logger.debug("Page changed to %d", page + 1)
        self.current_page = page
        self.update()

    def update(self):
        """Rebuild the current page from the store"""
        keys = self.store.filtered_sorted_keys(self.search_query)
        paginator = Paginator(len(keys), self.page_size, self.current_page)
        self.current_page = paginator.current_page
        self.page_keys = paginator.page_slice(keys)
        self.locales = self.store.sorted_locales

        self._configure_columns()

        children = self.tree.get_children()
        if children:
            self.tree.delete(*children)

        for row_index, key in enumerate(self.page_keys):
            values = [key]
            modified = False
            for locale in self.locales:
                result = self.store.get_value(key, locale)
                if result is None:
                    values.append('')
                    continue
                values.append(result.value)
                modified = modified or result.is_modified

            tags = []
            if modified:
                tags.append(TAG_MODIFIED)
            elif row_index % 2:
                tags.append(TAG_ODD_ROW)
            self.tree.insert("", tk.END, iid=key, values=values, tags=tags)

        self._update_pagination(paginator)

    def _configure_columns(self):
        # Column ids are positional; a locale may be named anything
        locale_columns = [f"locale_{index}" for index in range(len(self.locales))]
        self.tree.configure(columns=["key"] + locale_columns)
        self.tree.heading("key", text="KEY")
        self.tree.column("key", width=TABLE_KEY_WIDTH, stretch=False)
        for column, locale in zip(locale_columns, self.locales):
            flag = locale_to_flag(locale)
            heading = f"{locale.upper()} {flag}" if flag else locale.upper()
            self.tree.heading(column, text=heading)
            self.tree.column(column, width=TABLE_LOCALE_WIDTH, stretch=False)

    def _update_pagination(self, paginator):
        for child in self.pagination_frame.winfo_children():
            child.destroy()
        if paginator.total_pages <= 1:
            return

        ttk.Label(self.pagination_frame, text=paginator.range_label()).pack(side=tk.LEFT, padx=(0, 15))

        def nav_button(text, page, enabled):
            button = ttk.Button(self.pagination_frame, text=text, width=3,
                                command=lambda: self.go_to_page(page))
            if not enabled:
                button.state(["disabled"])
            button.pack(side=tk.LEFT, padx=2)

        nav_button("«", 0, paginator.has_previous)
        nav_button("‹", paginator.current_page - 1, paginator.has_previous)
        for page in paginator.visible_pages():
            nav_button(str(page + 1), page, page != paginator.current_page)
        nav_button("›", paginator.current_page + 1, paginator.has_next)
        nav_button("»", paginator.total_pages - 1, paginator.has_next)

    def _cell_at(self, event):
        """Return (key, locale) under the mouse, or None"""
        if self.tree.identify_region(event.x, event.y) != "cell":
            return None
        key = self.tree.identify_row(event.y)
        column = self.tree.identify_column(event.x)  # '#1' is the key column
        index = int(column.lstrip('#')) - 2
        if not key or index < 0 or index >= len(self.locales):
            return None
        return key, self.locales[index]

    def on_cell_click(self, event):
        """Show where the clicked value comes from"""
        cell = self._cell_at(event)
        if cell is None:
            self.cell_info_var.set("")
            return
        key, locale = cell
        result = self.store.get_value(key, locale)
        if result is None:
            self.cell_info_var.set(f"{key} [{locale}]: No translation for this locale")
        elif result.is_modified:
            self.cell_info_var.set(f"{key} [{locale}]: Original: {result.original_value}")
        else:
            self.cell_info_var.set(f"{key} [{locale}]: Source: {result.source_file}")

    def on_cell_double_click(self, event):
        cell = self._cell_at(event)
        if cell is not None:
            self.open_editor(*cell)

    def open_editor(self, key, locale):
        """Edit one value. Keystrokes are stored silently; Save notifies."""
        result = self.store.get_value(key, locale)
        current_value = result.value if result else ''
        original_value = result.original_value if result else ''

        edit_dialog = tk.Toplevel(self.parent_frame)
        edit_dialog.title("Edit Translation")
        edit_dialog.geometry("600x320")

        ttk.Label(edit_dialog, text=f"Key: {key}", font=Font(weight="bold")).pack(pady=5)
        ttk.Label(edit_dialog, text=f"Locale: {locale}").pack()
        if result and result.source_file:
            ttk.Label(edit_dialog, text=f"Source: {result.source_file}",
                      foreground=COLOR_MUTED_FG).pack()

        ttk.Label(edit_dialog, text="Value:").pack(anchor=tk.W, padx=20, pady=(10, 5))
        text_widget = scrolledtext.ScrolledText(edit_dialog, height=8, wrap=tk.WORD)
        text_widget.pack(fill=tk.BOTH, expand=True, padx=20, pady=5)
        text_widget.insert(1.0, current_value)
        text_widget.focus()

        def current_text():
            # Text widgets always end with a newline
            return text_widget.get(1.0, "end-1c")

        def on_key_release(event=None):
            self.store.update_value_silent(key, locale, current_text())

        def save_edit():
            self.store.update_value_silent(key, locale, current_text())
            edit_dialog.destroy()
            self.store.notify_listeners()

        def revert():
            edit_dialog.destroy()
            self.store.update_value(key, locale, original_value)

        text_widget.bind("<KeyRelease>", on_key_release)

        button_row = ttk.Frame(edit_dialog)
        button_row.pack(pady=10)
        ttk.Button(button_row, text="Save", command=save_edit).pack(side=tk.LEFT, padx=5)
        if result and result.source_file:
            ttk.Button(button_row, text="Revert to Original", command=revert).pack(side=tk.LEFT, padx=5)
        edit_dialog.protocol("WM_DELETE_WINDOW", save_edit)
