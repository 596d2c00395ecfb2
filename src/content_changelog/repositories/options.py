"""Filter / paging options for change-log queries."""

from collections.abc import Mapping
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from content_changelog.errors import InvalidArgumentError

Direction = Literal["ASC", "DESC"]


class ChangeLogOptions(BaseModel):
    """
    Options accepted by the change-log queries.

    - ``contentid``: filter by content record ID
    - ``id``: filter by a specific change-log entry ID
    - ``limit`` / ``offset``: paging; ``offset`` only applies with ``limit``
    - ``order`` / ``direction``: ORDER BY column and ASC/DESC

    Unknown keys are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    contentid: Optional[int] = None
    id: Optional[int] = None
    limit: Optional[int] = Field(default=None, ge=0)
    offset: Optional[int] = Field(default=None, ge=0)
    order: Optional[str] = None
    direction: Direction = "ASC"

    @field_validator("direction", mode="before")
    @classmethod
    def _upper_direction(cls, v: Any) -> Any:
        if v is None:
            return "ASC"
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def without_paging(self) -> "ChangeLogOptions":
        return self.model_copy(update={"limit": None, "offset": None})


def coerce_options(options: "ChangeLogOptions | Mapping[str, Any] | None") -> ChangeLogOptions:
    """Normalize an options bag (mapping, model or None) into ``ChangeLogOptions``."""
    if options is None:
        return ChangeLogOptions()
    if isinstance(options, ChangeLogOptions):
        return options
    if not isinstance(options, Mapping):
        raise InvalidArgumentError(f"Invalid options: {options!r}")
    try:
        return ChangeLogOptions.model_validate(dict(options))
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid options: {e}") from e
