"""
Base view class for the application views
"""


class BaseView:
    """Base class for views"""

    def __init__(self, parent_frame, app, store):
        """
        Initialize the view

        Args:
            parent_frame: The parent frame
            app: Reference to the main application instance
            store: The TranslationStore the view reads and edits
        """
        self.parent_frame = parent_frame
        self.app = app
        self.store = store
        self.container = None

    def create(self):
        """Create the view UI - to be implemented by subclasses"""
        raise NotImplementedError("Subclasses must implement create()")

    def update(self):
        """Update the view with current data - to be implemented by subclasses"""

    def destroy(self):
        """Clean up the view"""
        if self.container:
            self.container.destroy()
            self.container = None
