"""
ARB Translation Assistant

Copyright (C) 2024 Urban-Equipe

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU Affero General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU Affero General Public License for more details.

You should have received a copy of the GNU Affero General Public License
along with this program.  If not, see <https://www.gnu.org/licenses/>.
"""

import argparse
import logging
import os
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from config_manager import ConfigManager
from constants import (
    APP_TITLE, DEFAULT_WINDOW_SIZE, ARB_EXTENSIONS, XLSX_EXTENSIONS,
    ZIP_EXTENSIONS, EXCEL_EXPORT_NAME, ARB_ARCHIVE_NAME, SEARCH_DEBOUNCE_MS,
    COLOR_MUTED_FG
)
from data_model import TranslationStore
from file_handlers import FileHandler, FileHandlerError
from logging_config import setup_logging
from views import TranslationTableView, FilePriorityDialog, LoadingDialog

logger = logging.getLogger(__name__)


class ArbTranslationGUI:
    def __init__(self, root, store, config_manager):
        self.root = root
        self.root.title(APP_TITLE)
        self.root.geometry(DEFAULT_WINDOW_SIZE)

        self.store = store
        self.config_manager = config_manager
        self.file_handler = FileHandler()
        self.loading_dialog = LoadingDialog(root)

        # Pending search update (root.after id)
        self._search_update_scheduled = None

        # Import in progress
        self._import_steps = None
        self._import_total = 0
        self._import_done = 0
        self._imported_entries = []
        self._import_errors = []

        self.create_widgets()
        self.store.subscribe(self.on_store_changed)
        self.on_store_changed()

    def create_widgets(self):
        # Toolbar (always visible)
        toolbar = ttk.LabelFrame(self.root, text="ARB Files", padding="10")
        toolbar.pack(fill=tk.X, padx=10, pady=5)

        buttons_row = ttk.Frame(toolbar)
        buttons_row.pack(fill=tk.X, pady=5)

        ttk.Button(buttons_row, text="Import ARB Files",
                   command=self.import_arb_files).pack(side=tk.LEFT, padx=5)
        self.export_excel_button = ttk.Button(buttons_row, text="Export to Excel",
                                              command=self.export_to_excel)
        self.export_excel_button.pack(side=tk.LEFT, padx=5)
        self.export_arb_button = ttk.Button(buttons_row, text="Export ARB Archive",
                                            command=self.export_arb_archive)
        self.export_arb_button.pack(side=tk.LEFT, padx=5)
        ttk.Button(buttons_row, text="Excel → ARB Archive",
                   command=self.convert_excel_to_arb).pack(side=tk.LEFT, padx=5)
        self.priority_button = ttk.Button(buttons_row, text="File Priority...",
                                          command=self.open_file_priority)
        self.priority_button.pack(side=tk.LEFT, padx=5)
        self.clear_button = ttk.Button(buttons_row, text="Clear All", command=self.clear_all)
        self.clear_button.pack(side=tk.LEFT, padx=5)

        # Search row
        search_row = ttk.Frame(toolbar)
        search_row.pack(fill=tk.X, pady=5)
        ttk.Label(search_row, text="Search:").pack(side=tk.LEFT, padx=5)
        self.search_var = tk.StringVar(value="")
        self.search_var.trace_add("write", lambda *args: self.schedule_search_update())
        ttk.Entry(search_row, textvariable=self.search_var, width=40).pack(side=tk.LEFT, padx=5)
        ttk.Button(search_row, text="Clear", command=self.clear_search).pack(side=tk.LEFT, padx=5)

        self.status_label = ttk.Label(search_row, text="", foreground=COLOR_MUTED_FG)
        self.status_label.pack(side=tk.RIGHT, padx=5)

        # Table
        table_frame = ttk.Frame(self.root)
        table_frame.pack(fill=tk.BOTH, expand=True)
        self.table_view = TranslationTableView(table_frame, self, self.store,
                                               self.config_manager.page_size)
        self.table_view.create()

    def on_store_changed(self):
        """Re-read the store after any change"""
        self.table_view.update()
        self.update_status()

        state = ["disabled"] if self.store.is_empty else ["!disabled"]
        for button in (self.export_excel_button, self.export_arb_button,
                       self.priority_button, self.clear_button):
            button.state(state)

    def update_status(self):
        """Update the file/key/locale counters"""
        if self.store.is_empty:
            self.status_label.config(text="Import ARB files to get started")
            return
        self.status_label.config(
            text=f"{len(self.store.imported_files)} files | "
                 f"{len(self.store.all_keys)} keys | "
                 f"{len(self.store.all_locales)} locales"
        )

    # Search

    def schedule_search_update(self):
        """Apply the search query once typing pauses"""
        if self._search_update_scheduled:
            self.root.after_cancel(self._search_update_scheduled)
        self._search_update_scheduled = self.root.after(SEARCH_DEBOUNCE_MS, self._do_search_update)

    def _do_search_update(self):
        self._search_update_scheduled = None
        self.table_view.set_search_query(self.search_var.get())

    def clear_search(self):
        if self._search_update_scheduled:
            self.root.after_cancel(self._search_update_scheduled)
            self._search_update_scheduled = None
        self.search_var.set("")
        self._do_search_update()

    # Import

    def initial_directory(self):
        directory = self.config_manager.last_directory
        return directory if directory and os.path.isdir(directory) else None

    def remember_directory(self, file_path):
        self.config_manager.last_directory = os.path.dirname(os.path.abspath(file_path))
        self.config_manager.save()

    def import_arb_files(self):
        """Select ARB files and import them one per event-loop turn"""
        if self._import_steps is not None:
            return

        file_paths = filedialog.askopenfilenames(
            title="Select ARB File(s)",
            filetypes=ARB_EXTENSIONS,
            initialdir=self.initial_directory()
        )
        if not file_paths:
            logger.debug("File dialog cancelled")
            return

        logger.info("Selected %d file(s) for import", len(file_paths))
        self.remember_directory(file_paths[0])

        self._import_steps = self.file_handler.iter_arb_import(file_paths)
        self._import_total = len(file_paths)
        self._import_done = 0
        self._imported_entries = []
        self._import_errors = []

        self.loading_dialog.show("Importing ARB files...")
        # Let the dialog paint before parsing starts
        self.root.after(1, self._import_next_file)

    def _import_next_file(self):
        step = next(self._import_steps, None)
        if step is None:
            self._finish_import()
            return

        self._import_done += 1
        if step.error:
            self._import_errors.append(f"{step.file_name}: {step.error}")
        else:
            self._imported_entries.extend(step.entries)
        self.loading_dialog.set_message(
            f"Importing ARB files... ({self._import_done}/{self._import_total})"
        )
        self.root.after(1, self._import_next_file)

    def _finish_import(self):
        entries, errors = self._imported_entries, self._import_errors
        self._import_steps = None
        self._imported_entries = []
        self._import_errors = []

        if entries:
            self.store.add_entries(entries)
        self.loading_dialog.hide()

        logger.info("Import complete: %d entries, %d error(s)", len(entries), len(errors))
        if errors:
            messagebox.showerror("Import Errors", "Errors parsing:\n" + "\n".join(errors))

    # Export

    def _run_with_loading(self, message, action):
        """Show the loading dialog while action() runs; return its result"""
        self.loading_dialog.show(message)
        self.root.update_idletasks()
        try:
            return action()
        finally:
            self.loading_dialog.hide()

    def export_to_excel(self):
        """Export the current table to an .xlsx file"""
        file_path = filedialog.asksaveasfilename(
            title="Export to Excel",
            defaultextension=".xlsx",
            filetypes=XLSX_EXTENSIONS,
            initialdir=self.initial_directory(),
            initialfile=self.file_handler.generate_timestamped_filename(EXCEL_EXPORT_NAME, ".xlsx")
        )
        if not file_path:
            return

        logger.info("Starting Excel export...")
        try:
            self._run_with_loading(
                "Exporting to Excel...",
                lambda: self.file_handler.export_to_excel(self.store, file_path)
            )
        except FileHandlerError as e:
            logger.error("Excel export failed: %s", e)
            messagebox.showerror("Error", f"Error exporting to Excel: {e}")
            return

        self.remember_directory(file_path)
        messagebox.showinfo("Success", f"Exported {len(self.store.all_keys)} keys to:\n{file_path}")

    def export_arb_archive(self):
        """Export the current table as a zip of ARB files"""
        file_path = filedialog.asksaveasfilename(
            title="Export ARB Archive",
            defaultextension=".zip",
            filetypes=ZIP_EXTENSIONS,
            initialdir=self.initial_directory(),
            initialfile=self.file_handler.generate_timestamped_filename(ARB_ARCHIVE_NAME, ".zip")
        )
        if not file_path:
            return

        try:
            count = self._run_with_loading(
                "Building ARB files...",
                lambda: self.file_handler.export_to_arb_archive(self.store, file_path)
            )
        except FileHandlerError as e:
            logger.error("ARB archive export failed: %s", e)
            messagebox.showerror("Error", f"Error exporting ARB archive: {e}")
            return

        self.remember_directory(file_path)
        messagebox.showinfo("Success", f"Wrote {count} ARB file(s) to:\n{file_path}")

    def convert_excel_to_arb(self):
        """Convert an exported Excel file back into ARB files"""
        excel_path = filedialog.askopenfilename(
            title="Select Excel File",
            filetypes=XLSX_EXTENSIONS,
            initialdir=self.initial_directory()
        )
        if not excel_path:
            logger.info("File dialog cancelled")
            return

        output_path = filedialog.asksaveasfilename(
            title="Save ARB Archive",
            defaultextension=".zip",
            filetypes=ZIP_EXTENSIONS,
            initialdir=os.path.dirname(excel_path),
            initialfile=self.file_handler.generate_timestamped_filename(ARB_ARCHIVE_NAME, ".zip")
        )
        if not output_path:
            return

        logger.info("Starting Excel to ARB conversion: %s", excel_path)
        try:
            count = self._run_with_loading(
                "Converting Excel to ARB...",
                lambda: self.file_handler.excel_to_arb_archive(excel_path, output_path)
            )
        except FileHandlerError as e:
            logger.warning("Excel to ARB conversion failed: %s", e)
            messagebox.showerror("Error", f"Error converting {os.path.basename(excel_path)}: {e}")
            return

        self.remember_directory(output_path)
        messagebox.showinfo("Success", f"Wrote {count} ARB file(s) to:\n{output_path}")

    # File priority and reset

    def open_file_priority(self):
        if self.store.is_empty:
            return
        if not self.store.file_priority_enabled:
            messagebox.showinfo("File Priority", "File priority is disabled in the configuration")
            return
        FilePriorityDialog(self.root, self, self.store).create()

    def clear_all(self):
        if messagebox.askyesno("Clear All", "Remove all imported files and unsaved edits?"):
            self.store.clear()


def main():
    parser = argparse.ArgumentParser(description=APP_TITLE)
    parser.add_argument("--debug", action="store_true", help="Log debug messages to the console")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--config", help="Path of the configuration file")
    args = parser.parse_args()

    setup_logging(debug=args.debug, log_file=args.log_file)

    config_manager = ConfigManager(args.config)
    config_manager.load()
    store = TranslationStore(file_priority_enabled=config_manager.file_priority)

    root = tk.Tk()
    ArbTranslationGUI(root, store, config_manager)
    root.mainloop()


if __name__ == "__main__":
    main()
