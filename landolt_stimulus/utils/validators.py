"""YAML schema validation for circle layout files.

Layouts are produced elsewhere (this package does not pack circles) and
handed over as ``circles.v1`` YAML files:

    schema: circles.v1
    circles:
      - {x: 0.0, y: 0.0, r: 0.12}
      - {x: 0.5, y: -0.1, r: 0.07}

Validated with pydantic for fail-fast errors that name the offending
entry.

Units:
    - Normalized disc coordinates: enclosing disc radius 1, origin at
      its centre, +Y down

Usage:
    from landolt_stimulus.utils import validators
    circles = validators.load_circle_layout("layout.yaml")
"""

from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from landolt_stimulus.stimulus.types import Circle
from landolt_stimulus.utils import fs


# ============================================================================
# CIRCLE LAYOUT SCHEMA V1
# ============================================================================

class CircleSpec(BaseModel):
    """One circle of a layout (normalized units)."""
    x: float = Field(..., ge=-1.0, le=1.0, description="Centre x")
    y: float = Field(..., ge=-1.0, le=1.0, description="Centre y (+Y down)")
    r: float = Field(..., gt=0.0, le=1.0, description="Radius")

    def to_circle(self) -> Circle:
        return Circle(x=self.x, y=self.y, r=self.r)


class CircleLayoutV1(BaseModel):
    """Container for a pre-built circle layout (YAML file format)."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field("circles.v1", alias="schema", description="Schema version")
    circles: List[CircleSpec] = Field(..., description="Circles in draw order")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "circles.v1":
            raise ValueError(f"Expected schema 'circles.v1', got '{v}'")
        return v


def load_circle_layout(path: Union[str, Path]) -> List[Circle]:
    """Load and validate a circle layout from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to a circles.v1 YAML file

    Returns
    -------
    List[Circle]
        Circles in file order (which is also draw order)

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Circle layout not found: {path}")

    data = fs.load_yaml(path)
    if not isinstance(data, dict):
        raise ValueError(f"Circle layout at {path} must be a mapping, got {type(data).__name__}")
    try:
        layout = CircleLayoutV1(**data)
    except ValidationError as e:
        raise ValueError(f"Circle layout validation failed at {path}: {e}") from e
    return [spec.to_circle() for spec in layout.circles]
