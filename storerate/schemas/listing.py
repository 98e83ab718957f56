# storerate/schemas/listing.py
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

SortDirection = Literal["asc", "desc"]


class SortConfig(SQLModel):
    """
    Column sort applied to a list view.

    `key` is one of the sortable columns of the list being rendered.
    """

    model_config = ConfigDict(extra="forbid")

    key: str
    direction: SortDirection = "asc"
