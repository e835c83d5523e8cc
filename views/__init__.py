"""
View modules for ARB Translation Assistant
"""

from .translation_table_view import TranslationTableView
from .file_priority_dialog import FilePriorityDialog
from .loading_dialog import LoadingDialog

__all__ = ['TranslationTableView', 'FilePriorityDialog', 'LoadingDialog']
