"""
File Handlers for ARB Translation Assistant

Handles ARB import, Excel export/import and ARB archive creation.
"""

import io
import json
import logging
import os
import zipfile
from collections import namedtuple
from datetime import datetime

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError

from constants import (
    ARB_FILE_TEMPLATE, ARB_LOCALE_KEY, ARB_METADATA_PREFIX,
    CONTEXT_COLUMN_WIDTH, CONTEXT_HEADER, DESCRIPTION_COLUMN_WIDTH,
    DESCRIPTION_HEADER, FIRST_LOCALE_COLUMN, HEADER_FILL_COLOR,
    HEADER_FONT_COLOR, KEY_COLUMN_WIDTH, KEY_HEADER, LOCALE_COLUMN_WIDTH,
    SHEET_TITLE
)
from data_model import ArbEntry, extract_locale

logger = logging.getLogger(__name__)

# Result of importing one file: entries on success, an error message otherwise
ImportStep = namedtuple('ImportStep', ['file_name', 'entries', 'error'])


class FileHandlerError(Exception):
    """Base class for file handling errors"""


class ArbParseError(FileHandlerError):
    """An ARB file could not be read or parsed"""


class ExportError(FileHandlerError):
    """An export file could not be written"""


class ConversionError(FileHandlerError):
    """An Excel file could not be converted to ARB files"""


def _cell_text(value):
    """Convert a spreadsheet cell value to text"""
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _append_text_row(sheet, row):
    """Append row with every value stored as text"""
    try:
        sheet.append(row)
    except IllegalCharacterError as e:
        raise ExportError(f"Row {row[1]!r} contains characters that cannot be stored in a worksheet") from e
    # openpyxl would otherwise store '=...' strings as formulas
    for cell in sheet[sheet.max_row]:
        if isinstance(cell.value, str) and cell.value.startswith('='):
            cell.data_type = 's'


class FileHandler:
    """Handles file operations for ARB and Excel files"""

    # ARB import

    @staticmethod
    def parse_arb_content(content, filename):
        """Parse ARB content into entries, skipping empty and '@' metadata keys"""
        if isinstance(content, bytes):
            try:
                content = content.decode('utf-8')
            except UnicodeDecodeError as e:
                raise ArbParseError(f"{filename} is not valid UTF-8: {e}") from e

        try:
            document = json.loads(content)
        except json.JSONDecodeError as e:
            raise ArbParseError(f"JSON parsing error in {filename}: {e}") from e

        if not isinstance(document, dict):
            raise ArbParseError(f"{filename} must contain a JSON object")

        source_file = os.path.basename(filename)
        locale = extract_locale(source_file)
        entries = []
        for key, value in document.items():
            if not key or key.startswith(ARB_METADATA_PREFIX):
                continue
            if not isinstance(value, str):
                value = json.dumps(value, ensure_ascii=False)
            entries.append(ArbEntry(key=key, value=value, source_file=source_file, locale=locale))

        logger.debug("Parsed %d keys from %s (locale: %s)", len(entries), source_file, locale)
        return entries

    @staticmethod
    def load_arb_file(file_path):
        """Read and parse a single ARB file"""
        try:
            with open(file_path, 'rb') as f:
                content = f.read()
        except OSError as e:
            raise ArbParseError(f"Error reading {os.path.basename(file_path)}: {e}") from e
        return FileHandler.parse_arb_content(content, file_path)

    @staticmethod
    def iter_arb_import(file_paths):
        """Import ARB files one at a time.

        Yields an ImportStep per file so the caller can update progress
        between files. A failing file is reported in its step and does not
        stop the remaining files.
        """
        for file_path in file_paths:
            file_name = os.path.basename(file_path)
            try:
                entries = FileHandler.load_arb_file(file_path)
            except ArbParseError as e:
                logger.warning("Failed to parse %s: %s", file_name, e)
                yield ImportStep(file_name, [], str(e))
            else:
                yield ImportStep(file_name, entries, None)

    @staticmethod
    def import_arb_files(file_paths):
        """Import all ARB files, returning (entries, error messages)"""
        all_entries = []
        errors = []
        for step in FileHandler.iter_arb_import(file_paths):
            if step.error:
                errors.append(f"{step.file_name}: {step.error}")
            else:
                all_entries.extend(step.entries)
        logger.info("Import complete: %d entries, %d error(s)", len(all_entries), len(errors))
        return all_entries, errors

    # Excel export

    @staticmethod
    def build_workbook(store):
        """Build a workbook with one row per key and one column per locale"""
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_TITLE

        locales = store.sorted_locales
        keys = store.sorted_keys

        _append_text_row(sheet, [CONTEXT_HEADER, KEY_HEADER, DESCRIPTION_HEADER] + locales)
        header_font = Font(bold=True, color=HEADER_FONT_COLOR)
        header_fill = PatternFill(start_color=HEADER_FILL_COLOR, end_color=HEADER_FILL_COLOR, fill_type='solid')
        for cell in sheet[1]:
            cell.font = header_font
            cell.fill = header_fill

        for key in keys:
            results = [store.get_value(key, locale) for locale in locales]

            # Context: the files this key's values come from
            source_files = []
            for result in results:
                if result is not None and result.source_file and result.source_file not in source_files:
                    source_files.append(result.source_file)

            values = [result.value if result is not None else '' for result in results]
            _append_text_row(sheet, [", ".join(source_files), key, ""] + values)

        sheet.column_dimensions[get_column_letter(1)].width = CONTEXT_COLUMN_WIDTH
        sheet.column_dimensions[get_column_letter(2)].width = KEY_COLUMN_WIDTH
        sheet.column_dimensions[get_column_letter(3)].width = DESCRIPTION_COLUMN_WIDTH
        for index in range(len(locales)):
            column = get_column_letter(FIRST_LOCALE_COLUMN + index + 1)
            sheet.column_dimensions[column].width = LOCALE_COLUMN_WIDTH

        logger.debug("Exported %d keys across %d locale(s)", len(keys), len(locales))
        return workbook

    @staticmethod
    def export_to_excel(store, output_path):
        """Write the store to an .xlsx file and return its size in bytes"""
        workbook = FileHandler.build_workbook(store)
        try:
            workbook.save(output_path)
        except OSError as e:
            raise ExportError(f"Error writing {os.path.basename(output_path)}: {e}") from e

        size = os.path.getsize(output_path)
        if size == 0:
            raise ExportError(f"Excel export produced an empty file: {output_path}")
        logger.info("Excel file written: %s (%d bytes)", output_path, size)
        return size

    # Excel to ARB

    @staticmethod
    def read_excel_translations(source):
        """Read an exported workbook back into {locale: {key: value}}.

        The first sheet is expected to have the export layout:
        Context | Key | Description | locale1 | locale2 | ...
        """
        try:
            workbook = load_workbook(source, read_only=True, data_only=True)
        except Exception as e:
            # openpyxl raises a variety of errors for unreadable files
            raise ConversionError(f"Error opening Excel file: {e}") from e

        try:
            sheet = workbook.worksheets[0]
            rows = list(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

        if len(rows) < 2:
            raise ConversionError("The sheet has no data rows")

        header = rows[0]
        locale_columns = []  # [(column index, locale)]
        for col in range(FIRST_LOCALE_COLUMN, len(header)):
            locale = _cell_text(header[col]).strip()
            if locale:
                locale_columns.append((col, locale))

        if not locale_columns:
            raise ConversionError("No locale columns found in the header row")

        locale_data = {locale: {} for _, locale in locale_columns}
        for row in rows[1:]:
            key = _cell_text(row[1]) if len(row) > 1 else ''
            if not key:
                continue
            for col, locale in locale_columns:
                locale_data[locale][key] = _cell_text(row[col]) if len(row) > col else ''

        logger.debug("Parsed %d locale(s) from Excel: %s", len(locale_columns), list(locale_data))
        return locale_data

    # ARB archive

    @staticmethod
    def build_arb_document(locale, translations):
        """Render one ARB document with the locale marker and sorted keys"""
        document = {ARB_LOCALE_KEY: locale}
        for key in sorted(translations):
            document[key] = translations[key]
        return json.dumps(document, indent=2, ensure_ascii=False)

    @staticmethod
    def build_arb_archive(locale_data):
        """Zip one ARB document per locale and return the archive bytes"""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as archive:
            for locale, translations in locale_data.items():
                name = ARB_FILE_TEMPLATE.format(locale=locale)
                content = FileHandler.build_arb_document(locale, translations).encode('utf-8')
                archive.writestr(name, content)
                logger.debug("Added %s (%d bytes)", name, len(content))
        return buffer.getvalue()

    @staticmethod
    def write_arb_archive(locale_data, output_path):
        """Write the ARB archive for locale_data to output_path"""
        archive_bytes = FileHandler.build_arb_archive(locale_data)
        try:
            with open(output_path, 'wb') as f:
                f.write(archive_bytes)
        except OSError as e:
            raise ExportError(f"Error writing {os.path.basename(output_path)}: {e}") from e
        logger.info("Zip written: %s (%d bytes, %d ARB files)", output_path, len(archive_bytes), len(locale_data))
        return len(locale_data)

    @staticmethod
    def excel_to_arb_archive(excel_path, output_path):
        """Convert an exported workbook into a zip of ARB files"""
        locale_data = FileHandler.read_excel_translations(excel_path)
        return FileHandler.write_arb_archive(locale_data, output_path)

    @staticmethod
    def collect_locale_data(store):
        """Current store values as {locale: {key: value}}, skipping missing keys"""
        locale_data = {}
        keys = store.sorted_keys
        for locale in store.sorted_locales:
            translations = {}
            for key in keys:
                result = store.get_value(key, locale)
                if result is not None:
                    translations[key] = result.value
            locale_data[locale] = translations
        return locale_data

    @staticmethod
    def export_to_arb_archive(store, output_path):
        """Write the current store as a zip of ARB files"""
        return FileHandler.write_arb_archive(FileHandler.collect_locale_data(store), output_path)

    @staticmethod
    def generate_timestamped_filename(base_name, extension):
        """Generate a timestamped filename"""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return f"{base_name}_{timestamp}{extension}"
