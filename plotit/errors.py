from __future__ import annotations


class PlotError(Exception):
    """Base class for failures surfaced by plotit."""


class PlotDataError(PlotError, ValueError):
    pass


class LayoutPreconditionError(PlotDataError):
    def __init__(self, message: str, *, field: str, data_set: str | None = None) -> None:
        self.field = field
        self.data_set = data_set
        if data_set is not None:
            message = f"data set `{data_set}`: {field}: {message}"
        else:
            message = f"{field}: {message}"
        super().__init__(message)


class DataSourceError(PlotDataError):
    def __init__(
        self,
        message: str,
        *,
        path: str,
        row: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = path
        self.row = row
        self.column = column
        where = path
        if row is not None:
            where += f", row {row}"
        if column is not None:
            where += f", column {column}"
        super().__init__(f"{where}: {message}")


class ConfigError(PlotError):
    def __init__(self, message: str, *, field: str | None = None) -> None:
        self.field = field
        super().__init__(f"{field}: {message}" if field else message)
