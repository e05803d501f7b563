"""Reversible edit records kept by the undo history."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .color import BLACK, normalize_or_default


class DrawAction(BaseModel):
    """A single cell edit; holds the color the cell had before the edit."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["draw"] = "draw"
    index: int = Field(ge=0, description="Linear cell index")
    previous_color: str = Field(alias="color", description="Cell color before the edit")

    @field_validator("previous_color", mode="before")
    @classmethod
    def validate_previous_color(cls, v: Any) -> str:
        """Stored logs may hold empty or malformed colors; treat them as black."""
        return normalize_or_default(v) if isinstance(v, str) and v else BLACK


class ClearAllAction(BaseModel):
    """A whole-grid edit (clear or bulk apply); holds the full prior snapshot."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["clear"] = "clear"
    previous_cells: tuple[str, ...] = Field(alias="pixels", description="Grid snapshot before the edit")

    @field_validator("previous_cells", mode="before")
    @classmethod
    def validate_previous_cells(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return tuple(normalize_or_default(c) if isinstance(c, str) and c else BLACK for c in v)
        return v


HistoryAction = Annotated[Union[DrawAction, ClearAllAction], Field(discriminator="type")]

# Serialized with by_alias=True so stored logs keep the {"type", "index", "color"}
# and {"type", "pixels"} shape.
history_log_adapter = TypeAdapter(list[HistoryAction])
