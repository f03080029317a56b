"""DataFrame conversion utilities."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

import pandas as pd

if TYPE_CHECKING:
    from sumosearch.results import ResultPage

# Sumo Logic built-in fields holding epoch milliseconds.
TIMESTAMP_FIELDS = ("_messagetime", "_receipttime")


def page_to_dataframe(
    page: "ResultPage",
    parse_timestamps: bool = True,
) -> pd.DataFrame:
    """
    Convert a ResultPage to a pandas DataFrame.

    Columns follow the page's field list, in order. Payload keys not
    described by a field are appended after them.

    Args:
        page: ResultPage whose message payloads are mappings
        parse_timestamps: If True, convert _messagetime/_receipttime to datetime

    Returns:
        pandas DataFrame with one row per message

    Raises:
        ValueError: If a message payload is not a mapping

    Example:
        page = client.get_results(job, offset=0, limit=100)
        df = page_to_dataframe(page)
        print(df.dtypes)  # _messagetime is datetime64[ns, UTC]
    """
    rows = []
    for index, message in enumerate(page.messages):
        if not isinstance(message.payload, Mapping):
            raise ValueError(
                f"Message {index} payload is {type(message.payload).__name__}, "
                "expected a mapping"
            )
        rows.append(dict(message.payload))

    columns = list(page.field_names)
    for row in rows:
        for key in row:
            if key not in columns:
                columns.append(key)

    df = pd.DataFrame(rows, columns=columns)

    if df.empty or not parse_timestamps:
        return df

    for name in TIMESTAMP_FIELDS:
        if name in df.columns:
            # Values arrive as strings of epoch milliseconds
            df[name] = pd.to_datetime(pd.to_numeric(df[name]), unit="ms", utc=True)

    return df
