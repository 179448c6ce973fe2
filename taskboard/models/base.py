"""Shared base for records exchanged with callers."""

from typing import Any, Mapping, TypeVar, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire (matches the seed JSON files)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def coerce_model(data: Union[BaseModel, Mapping[str, Any], None], model_cls: type[ModelT]) -> ModelT:
    """Validate caller input (a model instance or a plain mapping) as ``model_cls``.

    Only fields the caller actually supplied are marked as set, so
    ``model_dump(exclude_unset=True)`` yields exactly the caller's overrides.
    """
    if data is None:
        return model_cls()
    if isinstance(data, model_cls):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_unset=True)
    return model_cls.model_validate(dict(data))
