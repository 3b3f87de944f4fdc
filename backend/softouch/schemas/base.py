"""
Shared schema base: camelCase on the wire, snake_case in Python.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC and normalize aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def split_tags(value) -> list[str]:
    """Accept a comma separated string or a list; drop blanks and duplicates."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    tags: list[str] = []
    for item in value:
        tag = str(item).strip()
        if tag and tag.lower() not in (t.lower() for t in tags):
            tags.append(tag)
    return tags
