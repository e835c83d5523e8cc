"""
Data Model for ARB Translation Assistant

Manages the merged translation state: imported entries, unsaved edits
and file-priority ordering.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArbEntry:
    """A single key/value pair imported from one ARB file"""
    key: str
    value: str
    source_file: str
    locale: str


@dataclass(frozen=True)
class LookupResult:
    """Current (possibly edited) value for a key/locale pair"""
    value: str
    original_value: str
    source_file: str
    is_modified: bool


def extract_locale(filename):
    """Extract the locale from an ARB filename.

    'intl_en_US.arb' -> 'en_US', 'messages.arb' -> 'messages'
    """
    stem = filename.replace('.arb', '')
    underscore = stem.find('_')
    if underscore == -1:
        return stem
    return stem[underscore + 1:]


class TranslationStore:
    """Holds imported ARB entries, the edit overlay and file priority.

    Edits never touch the imported entries; they are layered on top and
    resolved in get_value(). Every mutating call except
    update_value_silent() notifies subscribers once it is done.
    """

    def __init__(self, file_priority_enabled=True):
        self.file_priority_enabled = file_priority_enabled

        self._entries = []  # ArbEntry, in import order
        self._edits = {}  # {(locale, key): value}
        self._file_priority = []  # Source files, highest priority first
        self._listeners = []

    # Change notification

    def subscribe(self, callback):
        """Call callback() after every notifying mutation"""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def unsubscribe(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def notify_listeners(self):
        """Tell subscribers the state changed. Also used to flush silent edits."""
        for callback in list(self._listeners):
            callback()

    # Derived views

    @property
    def all_keys(self):
        return {entry.key for entry in self._entries}

    @property
    def all_locales(self):
        return {entry.locale for entry in self._entries}

    @property
    def sorted_keys(self):
        return sorted(self.all_keys)

    @property
    def sorted_locales(self):
        return sorted(self.all_locales)

    @property
    def is_empty(self):
        return not self._entries

    @property
    def imported_files(self):
        return set(self._file_priority)

    @property
    def file_priority(self):
        return tuple(self._file_priority)

    def filtered_sorted_keys(self, query):
        """Sorted keys whose name or any locale value contains query (case-insensitive)"""
        if not query:
            return self.sorted_keys

        needle = query.lower()
        locales = self.all_locales
        matches = []
        for key in self.sorted_keys:
            if needle in key.lower():
                matches.append(key)
                continue
            for locale in locales:
                result = self.get_value(key, locale)
                if result is not None and needle in result.value.lower():
                    matches.append(key)
                    break
        return matches

    def _winning_entry(self, key, locale):
        candidates = [e for e in self._entries if e.key == key and e.locale == locale]
        if not candidates:
            return None
        if not self.file_priority_enabled:
            return candidates[0]

        unknown = len(self._file_priority)

        def rank(entry):
            # Files missing from the priority list rank below every known file
            try:
                return self._file_priority.index(entry.source_file)
            except ValueError:
                return unknown

        # min() keeps the first candidate on ties
        return min(candidates, key=rank)

    def get_value(self, key, locale):
        """Resolve the value for key in locale.

        Returns None only when no imported entry exists and there is no
        non-empty edit either.
        """
        entry = self._winning_entry(key, locale)
        edited = self._edits.get((locale, key))

        if entry is None:
            if not edited:
                return None
            return LookupResult(
                value=edited,
                original_value='',
                source_file='',
                is_modified=True
            )

        return LookupResult(
            value=edited if edited is not None else entry.value,
            original_value=entry.value,
            source_file=entry.source_file,
            is_modified=edited is not None and edited != entry.value
        )

    # Mutations

    def update_value_silent(self, key, locale, new_value):
        """Store an edit without notifying (used while typing)"""
        self._edits[(locale, key)] = new_value

    def update_value(self, key, locale, new_value):
        """Store an edit and notify subscribers"""
        self._edits[(locale, key)] = new_value
        self.notify_listeners()

    def add_entries(self, entries):
        """Append entries and register unseen source files at lowest priority"""
        entries = list(entries)
        self._entries.extend(entries)

        new_files = []
        for entry in entries:
            if entry.source_file not in self._file_priority:
                self._file_priority.append(entry.source_file)
                new_files.append(entry.source_file)

        logger.info("Added %d entries from %d new file(s)", len(entries), len(new_files))
        logger.debug(
            "Total: %d entries, %d files, %d keys, %d locales",
            len(self._entries), len(self._file_priority),
            len(self.all_keys), len(self.all_locales)
        )
        self.notify_listeners()

    def reorder_files(self, old_index, new_index):
        """Move the file at old_index to new_index in the priority list"""
        if old_index < new_index:
            new_index -= 1
        source_file = self._file_priority.pop(old_index)
        self._file_priority.insert(new_index, source_file)
        self.notify_listeners()

    def set_file_priority(self, new_order):
        """Replace the whole priority order"""
        new_order = list(new_order)
        logger.info("File priority updated: %s", " > ".join(new_order))
        self._file_priority = new_order
        self.notify_listeners()

    def clear(self):
        """Remove all entries, edits and file priority data"""
        logger.info("Clearing all data")
        self._entries = []
        self._edits = {}
        self._file_priority = []
        self.notify_listeners()
