"""
File Priority dialog for ARB Translation Assistant

Lets the user reorder imported files. When two files define the same key
for the same locale, the file higher in the list wins.
"""

import logging
import tkinter as tk
from tkinter import ttk

from constants import FONT_ARIAL_BOLD, COLOR_MUTED_FG
from data_model import extract_locale
from .base_view import BaseView

logger = logging.getLogger(__name__)


class FilePriorityDialog(BaseView):
    """Modal dialog for reordering the file priority list"""

    def create(self):
        """Create the dialog UI"""
        logger.info("Opening file priority dialog (%d files)", len(self.store.file_priority))
        self.files = list(self.store.file_priority)

        self.container = tk.Toplevel(self.parent_frame)
        self.container.title("File Priority")
        self.container.geometry("480x420")
        self.container.transient(self.parent_frame)

        frame = ttk.Frame(self.container, padding="10")
        frame.pack(fill=tk.BOTH, expand=True)

        ttk.Label(frame, text="File Priority", font=FONT_ARIAL_BOLD).pack(anchor=tk.W)
        ttk.Label(frame, text="Files at the top win when several files define the same key.",
                  foreground=COLOR_MUTED_FG).pack(anchor=tk.W, pady=(0, 10))

        list_frame = ttk.Frame(frame)
        list_frame.pack(fill=tk.BOTH, expand=True)
        self.listbox = tk.Listbox(list_frame, selectmode=tk.SINGLE, activestyle="none")
        self.listbox.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        scrollbar = ttk.Scrollbar(list_frame, orient=tk.VERTICAL, command=self.listbox.yview)
        scrollbar.pack(side=tk.RIGHT, fill=tk.Y)
        self.listbox.config(yscrollcommand=scrollbar.set)

        move_row = ttk.Frame(frame)
        move_row.pack(fill=tk.X, pady=5)
        ttk.Button(move_row, text="Move Up", command=lambda: self.move_selected(-1)).pack(side=tk.LEFT, padx=5)
        ttk.Button(move_row, text="Move Down", command=lambda: self.move_selected(1)).pack(side=tk.LEFT, padx=5)

        button_row = ttk.Frame(frame)
        button_row.pack(fill=tk.X, pady=(10, 0))
        ttk.Button(button_row, text="Apply", command=self.apply).pack(side=tk.RIGHT, padx=5)
        ttk.Button(button_row, text="Cancel", command=self.destroy).pack(side=tk.RIGHT, padx=5)

        self.update()
        self.container.grab_set()

    def update(self):
        """Refresh the listbox from the local file order"""
        self.listbox.delete(0, tk.END)
        for index, file_name in enumerate(self.files):
            self.listbox.insert(tk.END, f"{index + 1}. {file_name}  [{extract_locale(file_name)}]")

    def move_selected(self, offset):
        """Move the selected file up (-1) or down (+1)"""
        selection = self.listbox.curselection()
        if not selection:
            return
        index = selection[0]
        target = index + offset
        if target < 0 or target >= len(self.files):
            return
        self.files.insert(target, self.files.pop(index))
        self.update()
        self.listbox.selection_set(target)
        self.listbox.see(target)

    def apply(self):
        """Apply the new order to the store and close"""
        logger.info("Applying new file priority order")
        new_order = list(self.files)
        self.destroy()
        self.store.set_file_priority(new_order)
