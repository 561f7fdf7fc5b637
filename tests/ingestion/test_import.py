import json

import pytest

from errors import InvalidInputError
from ingestion import import_csv_file

CSV_DATA = """date,description,amount
2025-01-15,Swiggy order,-250
2025-01-16,City clinic,-900
2025-01-17,Salary,50000
"""


def _write(tmp_path, content, name="statement.csv"):
    path = tmp_path / name
    path.write_text(content)
    return path


class TestImportCsvFile:
    """Tests for import_csv_file."""

    def test_import_stores_and_categorizes(self, services, user, fake_llm, tmp_path):
        fake_llm.replies["categorization"] = json.dumps(
            {"category": "Healthcare", "confidence": 75}
        )

        result = import_csv_file(services, user.id, _write(tmp_path, CSV_DATA))

        assert result.count == 3
        assert result.categorized == 3
        stored = {
            t.description: (t.category, t.confidence, t.status)
            for t in services.transactions.find_by_user(user.id)
        }
        assert stored == {
            "Swiggy order": ("Food & Dining", 95, "categorized"),
            "City clinic": ("Healthcare", 75, "categorized"),
            "Salary": ("Income", 95, "categorized"),
        }
        assert len(fake_llm.calls_for("categorization")) == 1

    def test_llm_failure_still_imports(self, services, user, fake_llm, tmp_path):
        fake_llm.replies["categorization"] = RuntimeError("timeout")

        result = import_csv_file(services, user.id, _write(tmp_path, CSV_DATA))

        assert result.count == 3
        clinic = services.transactions.find_by_user(user.id, category="Other")
        assert [(t.description, t.confidence) for t in clinic] == [("City clinic", 30)]

    def test_failed_categorization_leaves_row_pending(
        self, services, user, tmp_path, monkeypatch
    ):
        def explode(description):
            raise RuntimeError("boom")

        monkeypatch.setattr(services.categorizer, "categorize", explode)

        result = import_csv_file(services, user.id, _write(tmp_path, CSV_DATA))

        assert result.count == 3
        assert result.categorized == 0
        assert len(services.transactions.find_pending(user.id)) == 3

    def test_rejects_non_csv(self, services, user, tmp_path):
        with pytest.raises(InvalidInputError) as exc_info:
            import_csv_file(services, user.id, _write(tmp_path, CSV_DATA, "data.txt"))

        assert exc_info.value.message == "Only CSV files are allowed"

    def test_rejects_file_without_valid_rows(self, services, user, tmp_path):
        path = _write(tmp_path, "date,description,amount\nbad,,\n")

        with pytest.raises(InvalidInputError) as exc_info:
            import_csv_file(services, user.id, path)

        assert exc_info.value.message == "No valid transactions found in CSV"
        assert services.transactions.find_by_user(user.id) == []
