"""Result page types for search job messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    import pandas as pd


class ResultField(BaseModel):
    """Descriptor of one field present in the result messages."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    field_type: str = Field(alias="fieldType")
    key_field: bool = Field(False, alias="keyField")


class ResultMessage(BaseModel):
    """
    A single result message.

    The payload is whatever the server put under "map"; its shape
    depends on the log source and is left to the caller.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    payload: Any = Field(alias="map")


class ResultPage(BaseModel):
    """
    One page of search job messages, in server order.

    A page does not know its own offset or limit; callers track those
    while paging.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fields: list[ResultField] = Field(default_factory=list)
    messages: list[ResultMessage] = Field(default_factory=list)

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def __len__(self) -> int:
        return len(self.messages)

    def to_dataframe(self, parse_timestamps: bool = True) -> "pd.DataFrame":
        """
        Convert this page to a pandas DataFrame.

        Args:
            parse_timestamps: If True, convert epoch-millis time fields to datetime

        Returns:
            DataFrame with one row per message

        Raises:
            ValueError: If a message payload is not a mapping
        """
        from sumosearch._utils.dataframe import page_to_dataframe

        return page_to_dataframe(self, parse_timestamps=parse_timestamps)
