"""
Modal progress dialog shown while files are imported or exported
"""

import tkinter as tk
from tkinter import ttk

from constants import FONT_ARIAL


class LoadingDialog:
    """Small modal window with a message and an indeterminate progress bar"""

    def __init__(self, root):
        self.root = root
        self.window = None
        self.message_var = tk.StringVar(value="")

    def show(self, message):
        self.message_var.set(message)
        if self.window is not None:
            return

        self.window = tk.Toplevel(self.root)
        self.window.title("Please wait")
        self.window.resizable(False, False)
        self.window.transient(self.root)
        # Closing is not allowed while work is in progress
        self.window.protocol("WM_DELETE_WINDOW", lambda: None)

        frame = ttk.Frame(self.window, padding="20")
        frame.pack(fill=tk.BOTH, expand=True)
        ttk.Label(frame, textvariable=self.message_var, font=FONT_ARIAL).pack(pady=(0, 10))
        self.progress = ttk.Progressbar(frame, mode="indeterminate", length=260)
        self.progress.pack()
        self.progress.start(10)

        self.window.grab_set()
        self.window.update_idletasks()

    def set_message(self, message):
        self.message_var.set(message)

    def hide(self):
        if self.window is None:
            return
        self.progress.stop()
        self.window.grab_release()
        self.window.destroy()
        self.window = None
