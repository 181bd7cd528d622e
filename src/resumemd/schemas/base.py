from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Immutable schema base; instances are hashable and reject unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid")
