"""Tests for the tagged text writer and archive export."""

import io
import zipfile

import pytest

from tagloc.errors import ExportError
from tagloc.extraction.txt_parser import TxtParser
from tagloc.extraction.txt_writer import TxtWriter, group_by_language
from tagloc.models.entry import LocalizationEntry, ParseMetadata, ProcessedEntry


def processed(key, original, translated, code, table_id=None, entry_id="id"):
    entry = LocalizationEntry(id=f"{entry_id}-{key}", string_key=key, original_value=original, table_id=table_id)
    return ProcessedEntry.from_entry(entry, translated, code)


@pytest.fixture
def writer():
    return TxtWriter()


class TestSerialize:

    def test_layout(self, writer):
        entries = [processed("K1", "Hello", "Hallo", "de-DE"), processed("K2", "Bye", "Tschüss", "de-DE")]
        metadata = ParseMetadata(language_id="en-US", table_id="HUD_Main")

        assert writer.serialize(entries, "de-DE", metadata) == (
            "[LanguageID] de-DE\n"
            "[TableID] HUD_Main\n"
            "\n"
            "[StringKey] K1\n"
            "[Value] Hallo\n"
            "\n"
            "[StringKey] K2\n"
            "[Value] Tschüss\n"
        )

    def test_no_table_line_without_table(self, writer):
        content = writer.serialize([processed("K", "a", "b", "fr-FR")], "fr-FR", ParseMetadata())

        assert "[TableID]" not in content
        assert content.startswith("[LanguageID] fr-FR\n\n[StringKey] K\n")

    def test_strips_echo_prefix(self, writer):
        content = writer.serialize([processed("K", "Hello", "[ja-JP] Hello", "ja-JP")], "ja-JP", ParseMetadata())

        assert "[Value] Hello\n" in content

    def test_keeps_other_language_prefix(self, writer):
        content = writer.serialize([processed("K", "Hi", "[de-DE] Hi", "fr-FR")], "fr-FR", ParseMetadata())

        assert "[Value] [de-DE] Hi\n" in content

    def test_rejects_mixed_languages(self, writer):
        entries = [processed("K", "a", "b", "de-DE"), processed("K", "a", "c", "fr-FR")]

        with pytest.raises(ValueError):
            writer.serialize(entries, "de-DE", ParseMetadata())

    def test_optional_raw_header(self, writer):
        metadata = ParseMetadata(table_id="T", raw_header=("[Version] 3",))
        content = writer.serialize([], "de-DE", metadata, include_raw_header=True)

        assert content == "[LanguageID] de-DE\n[TableID] T\n[Version] 3\n"


class TestRoundTrip:

    def test_parse_serialize_parse_preserves_keys_and_tables(self, writer, sample_text):
        parser = TxtParser()
        parsed = parser.parse(sample_text)
        translated = [
            ProcessedEntry.from_entry(e, f"[it-IT] {e.original_value.upper()}", "it-IT")
            for e in parsed.entries
        ]

        reparsed = parser.parse(writer.serialize(translated, "it-IT", parsed.metadata))

        assert [e.string_key for e in reparsed.entries] == [e.string_key for e in parsed.entries]
        assert [e.table_id for e in reparsed.entries] == [e.table_id for e in parsed.entries]
        assert [e.original_value for e in reparsed.entries] == [
            e.original_value.upper() for e in parsed.entries
        ]
        assert reparsed.metadata.language_id == "it-IT"

    def test_multiple_tables_collapse_to_the_last_one(self, writer):
        parser = TxtParser()
        parsed = parser.parse(
            "[StringKey] LOOSE\n[Value] a\n"
            "[TableID] Menu\n[StringKey] M1\n[Value] b\n"
            "[TableID] Hud\n[StringKey] H1\n[Value] c\n"
        )
        translated = [ProcessedEntry.from_entry(e, e.original_value, "fr-FR") for e in parsed.entries]

        reparsed = parser.parse(writer.serialize(translated, "fr-FR", parsed.metadata))

        assert [e.table_id for e in parsed.entries] == [None, "Menu", "Hud"]
        assert [e.table_id for e in reparsed.entries] == ["Hud", "Hud", "Hud"]


class TestExport:

    def test_group_by_language_keeps_first_seen_order(self):
        entries = [
            processed("A", "a", "a1", "ja-JP"),
            processed("A", "a", "a2", "de-DE"),
            processed("B", "b", "b1", "ja-JP"),
        ]
        grouped = group_by_language(entries)

        assert list(grouped) == ["ja-JP", "de-DE"]
        assert [e.string_key for e in grouped["ja-JP"]] == ["A", "B"]

    def test_write_all(self, writer, tmp_path):
        entries = [processed("A", "a", "x", "de-DE"), processed("A", "a", "y", "fr-FR")]
        paths = writer.write_all(entries, ParseMetadata(), str(tmp_path / "out"))

        assert [p.name for p in paths] == ["localized_de-DE.txt", "localized_fr-FR.txt"]
        assert "[Value] y" in (tmp_path / "out" / "localized_fr-FR.txt").read_text(encoding="utf-8")

    def test_archive_has_one_file_per_language(self, writer):
        entries = [processed("A", "a", "x", "de-DE"), processed("A", "a", "y", "ko-KR")]
        data = writer.to_archive(entries, ParseMetadata(table_id="T"))

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert sorted(archive.namelist()) == ["localized_de-DE.txt", "localized_ko-KR.txt"]
            content = archive.read("localized_ko-KR.txt").decode("utf-8")

        assert content.startswith("[LanguageID] ko-KR\n[TableID] T\n")

    def test_raw_header_in_files_and_archive(self, writer, tmp_path):
        entries = [processed("A", "a", "x", "de-DE")]
        metadata = ParseMetadata(raw_header=("[Version] 3",))

        written = writer.write_all(entries, metadata, str(tmp_path), include_raw_header=True)
        data = writer.to_archive(entries, metadata, include_raw_header=True)

        assert "[Version] 3\n" in written[0].read_text(encoding="utf-8")
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert "[Version] 3\n" in archive.read("localized_de-DE.txt").decode("utf-8")
        with zipfile.ZipFile(io.BytesIO(writer.to_archive(entries, metadata))) as archive:
            assert "[Version]" not in archive.read("localized_de-DE.txt").decode("utf-8")

    def test_empty_archive_is_an_export_error(self, writer):
        with pytest.raises(ExportError):
            writer.to_archive([], ParseMetadata())
