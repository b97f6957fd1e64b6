"""
DataTable Mixin for consistent table setup and row selection handling.

Usage:
    class MyScreen(DataTableMixin, Screen):
        def compose(self):
            yield DataTable(id="my-table")

        def on_mount(self):
            self._setup_table("my-table", [("Name", 30), ("Value", None)])
"""

from __future__ import annotations

from textual.widgets import DataTable


class DataTableMixin:
    """Mixin providing consistent DataTable setup and row key extraction."""

    def _setup_table(
        self,
        table_id: str,
        columns: list[tuple[str, int | None]],
        *,
        cursor_type: str = "row",
        zebra_stripes: bool = True,
    ) -> DataTable:
        """Set up a DataTable with consistent configuration.

        Args:
            table_id: The ID of the DataTable widget to configure.
            columns: List of (column_name, width) tuples. Width can be None.
            cursor_type: Cursor type ('row', 'cell', or 'none').
            zebra_stripes: Whether to enable zebra striping.

        Returns:
            The configured DataTable instance.
        """
        table = self.query_one(f"#{table_id}", DataTable)
        table.cursor_type = cursor_type
        table.zebra_stripes = zebra_stripes
        for name, width in columns:
            table.add_column(name, width=width)
        return table

    def _get_selected_row_key(self, event: DataTable.RowSelected) -> str | None:
        """Extract the row key from a RowSelected event, or None."""
        row_key = event.row_key
        if row_key is None:
            return None
        return str(row_key.value)

    def _visible_row_count(self, table: DataTable) -> int:
        """Rows that fit in the table's current viewport, at least 1."""
        header = table.header_height if table.show_header else 0
        return max(table.size.height - header, 1)
