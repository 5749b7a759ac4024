"""
Test suite for sheet ingestion and CSV export.

The tests verify:
1. Positional mapping of sheet rows (columns A-U), padding of short rows
2. DataFrame mapping by column name and by position
3. CSV loading keeps every cell as text
4. Export rows per table, Metric/Value summary, CSV quoting and file names
"""

import io
from datetime import date

import pandas as pd
import pytest

from outreach_analytics.models import ExportTable
from outreach_analytics.services.analytics import compute_analytics
from outreach_analytics.services.export import export_filename, export_rows, to_csv
from outreach_analytics.services.ingestion import (
    SHEET_COLUMNS,
    load_records_csv,
    records_from_dataframe,
    records_from_rows,
)


# =============================================================================
# TEST CLASS: SHEET ROWS
# =============================================================================


class TestRecordsFromRows:
    def test_maps_columns_by_position(self, sheet_rows) -> None:
        record = records_from_rows(sheet_rows)[0]

        assert record.status == "Active"
        assert record.agent == "Dana"
        assert record.acceptanceRate == "40%"
        assert record.weekEnd == "2025-01-03"
        assert record.totalInvited == "1,000"
        assert record.totalActions == "50"

    def test_identity_follows_sheet_rows(self, sheet_rows) -> None:
        records = records_from_rows(sheet_rows)

        assert [r.id for r in records] == ["metric-0", "metric-1"]
        assert [r.rowIndex for r in records] == [2, 3]

    def test_short_rows_are_padded(self, sheet_rows) -> None:
        record = records_from_rows(sheet_rows)[1]

        assert record.agent == "Lee"
        assert record.message == ""
        assert record.weekEnd is None
        assert record.totalActions is None

    def test_extra_cells_are_ignored(self) -> None:
        row = [str(i) for i in range(len(SHEET_COLUMNS) + 3)]

        record = records_from_rows([row])[0]

        assert record.totalActions == "20"

    def test_no_rows(self) -> None:
        assert records_from_rows([]) == []


# =============================================================================
# TEST CLASS: DATAFRAMES AND CSV
# =============================================================================


class TestRecordsFromDataframe:
    def test_named_columns(self) -> None:
        df = pd.DataFrame({
            'agent': ["Dana", "Lee"],
            'totalInvited': ["100", "200"],
            'weekEnd': ["2025-01-03", None],
        })

        records = records_from_dataframe(df)

        assert [r.agent for r in records] == ["Dana", "Lee"]
        assert records[1].weekEnd is None
        assert records[0].campaign is None

    def test_positional_columns(self, sheet_rows) -> None:
        headers = [f"Column {letter}" for letter in "ABCDEFGHIJKLMNOPQRSTU"]
        df = pd.DataFrame([sheet_rows[0]], columns=headers)

        record = records_from_dataframe(df)[0]

        assert record.campaign == "Q1 Brokers"
        assert record.endingConnections == "900"

    def test_empty_dataframe(self) -> None:
        assert records_from_dataframe(pd.DataFrame()) == []


class TestLoadRecordsCsv:
    def test_cells_stay_text(self) -> None:
        content = (
            "Status,Campaign,Message,Audience,Agent,Acceptance Rate,Replies,Reply %,"
            "Defy Lead,Target,Algo Type,Week End,Location,Queue,Total Invited,"
            "Total Accepted,Net New,Starting,Ending,Total Messaged,Total Actions\n"
            'Active,Q1 Brokers,,Carriers,Dana,32%,27,9%,No,,,2025-01-10,Texas,,"1,200",384,,,,300,\n'
        )

        records = load_records_csv(io.StringIO(content))

        assert len(records) == 1
        assert records[0].totalInvited == "1,200"
        assert records[0].acceptanceRate == "32%"
        assert records[0].message == ""
        assert records[0].rowIndex == 2

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_records_csv(tmp_path / "missing.csv")


# =============================================================================
# TEST CLASS: EXPORT
# =============================================================================


class TestExport:
    @pytest.fixture
    def result(self, team_records, settings):
        return compute_analytics(team_records, settings=settings)

    def test_summary_rows(self, result) -> None:
        rows = export_rows(result, ExportTable.SUMMARY)

        summary = {row['Metric']: row['Value'] for row in rows}
        assert summary['Total Invited'] == 2500
        assert summary['Acceptance Rate'] == "30.8%"
        assert summary['Performance Tier'] == "Above Benchmark"
        assert summary['vs Benchmark'] == "+1.2%"

    def test_agent_rows_flatten_tier(self, result) -> None:
        rows = export_rows(result, "agents")

        assert rows[0]['agent'] == "Dana"
        assert rows[0]['tier'] == "Excellent"

    def test_bucket_rows(self, result) -> None:
        rows = export_rows(result, ExportTable.LOCATIONS)

        assert [row['key'] for row in rows] == ["Texas", "Ohio", "Unknown"]

    def test_unknown_table_or_result(self, result) -> None:
        assert export_rows(result, "pivot") == []
        assert export_rows(None, ExportTable.SUMMARY) == []

    def test_csv_has_header_and_quotes_commas(self) -> None:
        rows = [{'Metric': 'Audience', 'Value': 'Brokers, Texas'}]

        content = to_csv(rows)

        assert content == 'Metric,Value\nAudience,"Brokers, Texas"\n'

    def test_csv_of_no_rows(self) -> None:
        assert to_csv([]) == ''

    def test_export_filename(self) -> None:
        assert export_filename("analytics_summary", date(2025, 3, 1)) == "analytics_summary_2025-03-01.csv"
