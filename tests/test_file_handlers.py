"""
Tests for ARB import, Excel export and ARB archive creation
"""

import io
import json
import zipfile

import pytest
from openpyxl import Workbook, load_workbook

from data_model import ArbEntry, TranslationStore
from file_handlers import (
    ArbParseError, ConversionError, ExportError, FileHandler, ImportStep
)


def write_arb(directory, name, document):
    path = directory / name
    path.write_text(json.dumps(document), encoding='utf-8')
    return str(path)


def workbook_bytes(workbook):
    buffer = io.BytesIO()
    workbook.save(buffer)
    buffer.seek(0)
    return buffer


@pytest.fixture
def store():
    store = TranslationStore()
    store.add_entries([
        ArbEntry("greeting", "Hello", "app_en.arb", "en"),
        ArbEntry("greeting", "Hallo", "app_de.arb", "de"),
        ArbEntry("farewell", "Goodbye", "app_en.arb", "en"),
        ArbEntry("farewell", "Tschüss", "extra_de.arb", "de"),
    ])
    return store


class TestParseArb:
    def test_skips_metadata_keys(self):
        content = json.dumps({
            "@@locale": "en",
            "greeting": "Hello {name}",
            "@greeting": {"placeholders": {"name": {}}},
        })
        entries = FileHandler.parse_arb_content(content, "app_en.arb")
        assert entries == [ArbEntry("greeting", "Hello {name}", "app_en.arb", "en")]

    def test_decodes_utf8_bytes(self):
        content = json.dumps({"farewell": "Tschüss"}, ensure_ascii=False).encode('utf-8')
        entries = FileHandler.parse_arb_content(content, "/some/dir/intl_de_AT.arb")
        assert entries == [ArbEntry("farewell", "Tschüss", "intl_de_AT.arb", "de_AT")]

    def test_non_string_values_become_json_text(self):
        entries = FileHandler.parse_arb_content('{"count": 3, "flag": true, "nested": {"a": "ä"}}', "app_en.arb")
        assert [e.value for e in entries] == ["3", "true", '{"a": "ä"}']

    def test_skips_empty_key(self):
        entries = FileHandler.parse_arb_content('{"": "empty", "k": "v"}', "app_en.arb")
        assert entries == [ArbEntry("k", "v", "app_en.arb", "en")]

    @pytest.mark.parametrize("content", ["{not json", "[1, 2]", b"\xff\xfe{}"])
    def test_malformed_content(self, content):
        with pytest.raises(ArbParseError):
            FileHandler.parse_arb_content(content, "app_en.arb")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArbParseError):
            FileHandler.load_arb_file(str(tmp_path / "missing_en.arb"))


class TestImportArbFiles:
    def test_collects_entries_and_errors_per_file(self, tmp_path):
        good_en = write_arb(tmp_path, "app_en.arb", {"@@locale": "en", "title": "Title"})
        broken = tmp_path / "app_fr.arb"
        broken.write_text("{broken", encoding='utf-8')
        good_de = write_arb(tmp_path, "app_de.arb", {"title": "Titel"})

        entries, errors = FileHandler.import_arb_files([good_en, str(broken), good_de])

        assert entries == [
            ArbEntry("title", "Title", "app_en.arb", "en"),
            ArbEntry("title", "Titel", "app_de.arb", "de"),
        ]
        assert len(errors) == 1
        assert errors[0].startswith("app_fr.arb: ")

    def test_iter_yields_one_step_per_file(self, tmp_path):
        paths = [
            write_arb(tmp_path, "a_en.arb", {"k": "v"}),
            str(tmp_path / "missing_de.arb"),
        ]
        steps = list(FileHandler.iter_arb_import(paths))

        assert [step.file_name for step in steps] == ["a_en.arb", "missing_de.arb"]
        assert steps[0] == ImportStep("a_en.arb", [ArbEntry("k", "v", "a_en.arb", "en")], None)
        assert steps[1].entries == []
        assert steps[1].error

    def test_imported_entries_feed_the_store(self, tmp_path):
        paths = [
            write_arb(tmp_path, "base_en.arb", {"title": "Base"}),
            write_arb(tmp_path, "custom_en.arb", {"title": "Custom"}),
        ]
        entries, errors = FileHandler.import_arb_files(paths)
        store = TranslationStore()
        store.add_entries(entries)

        assert errors == []
        assert store.file_priority == ("base_en.arb", "custom_en.arb")
        assert store.get_value("title", "en").value == "Base"


class TestExcelExport:
    def test_workbook_layout(self, store):
        store.update_value("greeting", "en", "Hi")
        sheet = FileHandler.build_workbook(store).active
        rows = [list(row) for row in sheet.iter_rows(values_only=True)]

        assert sheet.title == "labels"
        assert rows[0] == ["Context", "Key", "Description", "de", "en"]
        assert rows[1][:2] == ["extra_de.arb, app_en.arb", "farewell"]
        assert rows[1][3:] == ["Tschüss", "Goodbye"]
        assert rows[2][:2] == ["app_de.arb, app_en.arb", "greeting"]
        assert rows[2][3:] == ["Hallo", "Hi"]

    def test_header_style_and_widths(self, store):
        sheet = FileHandler.build_workbook(store).active
        header = sheet["A1"]

        assert header.font.bold
        assert header.fill.fill_type == "solid"
        assert header.fill.start_color.rgb.endswith("4472C4")
        assert sheet.column_dimensions["A"].width == 30
        assert sheet.column_dimensions["B"].width == 35
        assert sheet.column_dimensions["D"].width == 40

    def test_missing_values_are_blank(self):
        store = TranslationStore()
        store.add_entries([
            ArbEntry("only_en", "English", "app_en.arb", "en"),
            ArbEntry("only_de", "Deutsch", "app_de.arb", "de"),
        ])
        rows = list(FileHandler.build_workbook(store).active.iter_rows(values_only=True))

        assert rows[1][1] == "only_de"
        assert rows[1][0] == "app_de.arb"
        assert rows[1][4] in ("", None)

    def test_export_to_file(self, store, tmp_path):
        output = tmp_path / "export.xlsx"
        size = FileHandler.export_to_excel(store, str(output))

        assert size == output.stat().st_size > 0
        sheet = load_workbook(output).active
        assert sheet["B2"].value == "farewell"

    def test_export_to_missing_directory(self, store, tmp_path):
        with pytest.raises(ExportError):
            FileHandler.export_to_excel(store, str(tmp_path / "missing" / "export.xlsx"))

    def test_formula_like_text_is_stored_as_text(self):
        store = TranslationStore()
        store.add_entries([ArbEntry("=total", "=SUM(A1:A3)", "app_en.arb", "en")])
        sheet = FileHandler.build_workbook(store).active

        assert sheet["B2"].value == "=total"
        assert sheet["B2"].data_type == "s"
        assert sheet["D2"].value == "=SUM(A1:A3)"
        assert sheet["D2"].data_type == "s"

    def test_control_characters_raise_export_error(self, tmp_path):
        store = TranslationStore()
        store.add_entries([ArbEntry("broken", "line\x0bbreak", "app_en.arb", "en")])
        output = tmp_path / "export.xlsx"

        with pytest.raises(ExportError, match="broken"):
            FileHandler.export_to_excel(store, str(output))
        assert not output.exists()


class TestExcelToArb:
    def test_reads_locale_columns(self):
        workbook = Workbook()
        sheet = workbook.active
        sheet.append(["Context", "Key", "Description", "en", None, "fr"])
        sheet.append(["app_en.arb", "title", "", "Title", "ignored", "Titre"])
        sheet.append(["", None, "", "no key", "", ""])
        sheet.append(["", "count", "", 3, "", None])

        locale_data = FileHandler.read_excel_translations(workbook_bytes(workbook))

        assert locale_data == {
            "en": {"title": "Title", "count": "3"},
            "fr": {"title": "Titre", "count": ""},
        }

    def test_sheet_without_data_rows(self):
        workbook = Workbook()
        workbook.active.append(["Context", "Key", "Description", "en"])
        with pytest.raises(ConversionError):
            FileHandler.read_excel_translations(workbook_bytes(workbook))

    def test_sheet_without_locale_columns(self):
        workbook = Workbook()
        workbook.active.append(["Context", "Key", "Description"])
        workbook.active.append(["", "title", ""])
        with pytest.raises(ConversionError):
            FileHandler.read_excel_translations(workbook_bytes(workbook))

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "not_excel.xlsx"
        path.write_bytes(b"plain text")
        with pytest.raises(ConversionError):
            FileHandler.read_excel_translations(str(path))

    def test_arb_document_layout(self):
        document = FileHandler.build_arb_document("de", {"zebra": "Zebra", "apfel": "Äpfel"})

        assert json.loads(document) == {"@@locale": "de", "apfel": "Äpfel", "zebra": "Zebra"}
        assert list(json.loads(document)) == ["@@locale", "apfel", "zebra"]
        assert "Äpfel" in document
        assert document.startswith('{\n  "@@locale": "de"')

    def test_archive_contains_one_file_per_locale(self):
        archive_bytes = FileHandler.build_arb_archive({"en": {"k": "v"}, "pt_BR": {"k": "vê"}})

        with zipfile.ZipFile(io.BytesIO(archive_bytes)) as archive:
            assert archive.namelist() == ["intl_en.arb", "intl_pt_BR.arb"]
            pt = json.loads(archive.read("intl_pt_BR.arb").decode('utf-8'))
        assert pt == {"@@locale": "pt_BR", "k": "vê"}

    def test_excel_to_arb_archive(self, store, tmp_path):
        excel_path = tmp_path / "export.xlsx"
        zip_path = tmp_path / "arb.zip"
        FileHandler.export_to_excel(store, str(excel_path))

        count = FileHandler.excel_to_arb_archive(str(excel_path), str(zip_path))

        assert count == 2
        with zipfile.ZipFile(zip_path) as archive:
            assert sorted(archive.namelist()) == ["intl_de.arb", "intl_en.arb"]


class TestStoreArchive:
    def test_collect_skips_missing_and_uses_edits(self):
        store = TranslationStore()
        store.add_entries([
            ArbEntry("only_en", "English", "app_en.arb", "en"),
            ArbEntry("shared", "Shared", "app_en.arb", "en"),
            ArbEntry("shared", "Geteilt", "app_de.arb", "de"),
        ])
        store.update_value("shared", "de", "Gemeinsam")

        assert FileHandler.collect_locale_data(store) == {
            "de": {"shared": "Gemeinsam"},
            "en": {"only_en": "English", "shared": "Shared"},
        }

    def test_export_to_arb_archive(self, store, tmp_path):
        zip_path = tmp_path / "arb.zip"
        assert FileHandler.export_to_arb_archive(store, str(zip_path)) == 2

        with zipfile.ZipFile(zip_path) as archive:
            de = json.loads(archive.read("intl_de.arb"))
        assert de == {"@@locale": "de", "farewell": "Tschüss", "greeting": "Hallo"}


def test_round_trip_through_excel(store):
    store.update_value("greeting", "en", "Hi there")
    store.add_entries([
        ArbEntry("=total", "=SUM(A1)", "app_en.arb", "en"),
        ArbEntry("=total", "=SUM(B1)", "app_de.arb", "de"),
    ])
    expected = FileHandler.collect_locale_data(store)
    assert expected["en"]["=total"] == "=SUM(A1)"

    workbook = FileHandler.build_workbook(store)
    locale_data = FileHandler.read_excel_translations(workbook_bytes(workbook))

    assert locale_data == expected

    archive_bytes = FileHandler.build_arb_archive(locale_data)
    with zipfile.ZipFile(io.BytesIO(archive_bytes)) as archive:
        for locale, translations in expected.items():
            document = json.loads(archive.read(f"intl_{locale}.arb"))
            assert document.pop("@@locale") == locale
            assert document == translations


def test_generate_timestamped_filename():
    name = FileHandler.generate_timestamped_filename("arb_export", ".xlsx")
    assert name.startswith("arb_export_")
    assert name.endswith(".xlsx")
    assert len(name) == len("arb_export_YYYYmmdd_HHMMSS.xlsx")
