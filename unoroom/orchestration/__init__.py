"""Table orchestration."""

from unoroom.orchestration.table_runner import TableResult, TableRunner

__all__ = ["TableResult", "TableRunner"]
