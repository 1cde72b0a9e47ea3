from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire; either is accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


def dump(schema: type[BaseModel], obj: Any) -> Any:
    """Serialize an ORM object (or an iterable of them) through ``schema``."""
    if isinstance(obj, Iterable) and not isinstance(obj, (str, bytes, dict)):
        return [dump(schema, o) for o in obj]
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)


def envelope(message: str = "", data: Any = None, success: bool = True) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    return body
