"""Shared pydantic base: camelCase JSON keys, snake_case attributes."""
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from utils.clock import as_utc

# SQLite returns naive datetimes; responses always carry UTC.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Base for request and response bodies exchanged with the web pages and charger consumers."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
