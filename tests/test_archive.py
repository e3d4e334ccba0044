"""
Tests for dated snapshot archives and their deltas.
"""

import pytest
from datetime import date

from src.mapping.coerce import safe_int
from src.report.archive import ArchiveEntry, build_archive, compute_deltas
from src.report.rankings import build_backlinks_archive, build_keywords_archive
from src.report.overview import build_gbp_insights
from src.sheets.schema import Field, TableSchema, read_rows
from src.sheets.store import InMemoryWorkbook


class TestComputeDeltas:
    """Deltas compare each entry with the next older one."""

    def test_oldest_entry_has_zero_change(self):
        entries = compute_deltas([
            ArchiveEntry(date(2024, 3, 1), {"backlinks": 120}),
            ArchiveEntry(date(2024, 2, 1), {"backlinks": 100}),
            ArchiveEntry(date(2024, 1, 1), {"backlinks": 90}),
        ])
        assert [e.changes["backlinks"] for e in entries] == [20, 10, 0]

    def test_single_entry(self):
        entries = compute_deltas([ArchiveEntry(date(2024, 1, 1), {"top3": 4})])
        assert entries[0].changes == {"top3": 0}

    def test_float_deltas_rounded(self):
        entries = compute_deltas([
            ArchiveEntry(date(2024, 2, 1), {"value": 0.3}),
            ArchiveEntry(date(2024, 1, 1), {"value": 0.1}),
        ])
        assert entries[0].changes["value"] == 0.2

    def test_to_dict(self):
        entry = ArchiveEntry(date(2024, 3, 1), {"backlinks": 120}, {"backlinks": 20})
        assert entry.to_dict() == {
            "date": "2024-03-01",
            "label": "March 2024",
            "backlinks": 120,
            "backlinksChange": 20,
        }


class TestArchiveSections:
    """Archive sections read from the client workbook."""

    def test_backlinks_archive_sorted_newest_first(self, client_workbook):
        archive = build_backlinks_archive(client_workbook)

        assert [e["label"] for e in archive] == ["March 2024", "February 2024", "January 2024"]
        assert [e["backlinks"] for e in archive] == [120, 100, 90]
        assert [e["backlinksChange"] for e in archive] == [20, 10, 0]
        assert archive[0]["referringDomainsChange"] == 5
        assert archive[0]["domainRatingChange"] == 1

    def test_unparseable_dates_skipped(self, client_workbook):
        assert len(build_backlinks_archive(client_workbook)) == 3

    def test_keywords_archive(self, client_workbook):
        archive = build_keywords_archive(client_workbook)

        assert archive[0]["totalKeywords"] == 210
        assert archive[0]["totalKeywordsChange"] == 10
        assert archive[0]["trafficValueChange"] == 400.5
        assert archive[1]["trafficValueChange"] == 0

    def test_gbp_insights(self, client_workbook):
        insights = build_gbp_insights(client_workbook)

        assert insights["latest"]["label"] == "March 2024"
        assert insights["latest"]["calls"] == 65
        assert insights["latest"]["callsChange"] == 15
        assert insights["latest"]["websiteClicksChange"] == -10
        assert len(insights["history"]) == 2

    def test_missing_table(self):
        workbook = InMemoryWorkbook("wb", {})
        assert build_backlinks_archive(workbook) == []
        assert build_gbp_insights(workbook) == {"latest": {}, "history": []}

    def test_custom_date_field(self):
        schema = TableSchema("Snapshots", (Field("taken", "Taken"), Field("count", "Count")))
        workbook = InMemoryWorkbook("wb", {"Snapshots": [["Taken", "Count"], ["Jan 2024", "7"]]})

        entries = build_archive(read_rows(workbook, schema), {"count": ("count", safe_int)}, date_field="taken")
        assert entries[0].metrics == {"count": 7}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
