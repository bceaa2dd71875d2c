from typing import Any

from pydantic.main import BaseModel


class BaseModelWithMethods(BaseModel):
    """Base model with the serialization helpers used by routes and repositories."""

    def to_json(self, **kwargs: Any) -> str:
        return self.model_dump_json(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_row(self, exclude: set[str] | None = None) -> dict[str, Any]:
        """Dump to a JSON-safe dict suitable for a table row, dropping unset values."""
        return self.model_dump(mode="json", exclude_none=True, exclude=exclude)
