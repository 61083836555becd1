"""Object naming shared with deployed databases; changing any value orphans existing objects."""

from typing import Final

HISTORY_TABLE_ANNOTATION: Final[str] = "HistoryTableName"
DEFAULT_HISTORY_TABLE_NAME: Final[str] = "DEFAULT"
HISTORY_TABLE_SUFFIX: Final[str] = "History"

AS_OF_FUNCTION_PREFIX: Final[str] = "eftt"
AS_OF_FUNCTION_SUFFIX: Final[str] = "AsOf"
AS_OF_FUNCTION_PARAMETER: Final[str] = "@utcSystemTime"

PERIOD_START_COLUMN: Final[str] = "SysStartTime"
PERIOD_END_COLUMN: Final[str] = "SysEndTime"
PERIOD_COLUMNS: Final[frozenset[str]] = frozenset({PERIOD_START_COLUMN, PERIOD_END_COLUMN})

MAX_IDENTIFIER_LEN: Final[int] = 128  # SQL Server sysname limit
