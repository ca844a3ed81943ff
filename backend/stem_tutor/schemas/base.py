"""
STEM Tutor - Schema Base
Wire format is camelCase JSON; Python attributes stay snake_case.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase field names."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )
    
    def to_document(self, **kwargs) -> dict:
        """Dump as the camelCase dict that is persisted and returned."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)


def unique(values: list[str] | None) -> list[str] | None:
    """Drop repeated entries while keeping first-seen order."""
    if values is None:
        return None
    return list(dict.fromkeys(values))
