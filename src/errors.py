"""
Service Exceptions

Raised for conditions that cannot be absorbed at the field or section level.
"""


class DashboardError(Exception):
    """Base exception for the dashboard data service."""
    pass


class MissingParameterError(DashboardError):
    """A required request parameter was not supplied."""

    def __init__(self, parameter: str):
        self.parameter = parameter
        super().__init__(f"Missing required parameter: {parameter}")


class SchemaMismatchError(DashboardError):
    """A table's header row does not carry the columns its schema requires."""

    def __init__(self, table: str, missing: list):
        self.table = table
        self.missing = list(missing)
        super().__init__(
            f"Table '{table}' is missing required columns: {', '.join(self.missing)}"
        )


class RowStoreError(DashboardError):
    """The spreadsheet backend could not be reached or configured."""
    pass
