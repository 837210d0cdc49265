from __future__ import annotations

import os
from typing import Mapping

from pydantic import BaseModel, Field


class BuilderSettings(BaseModel):
    debounce_ms: int = Field(default=3000, ge=0, description="Quiet period before an autosave is issued")
    saved_display_ms: int = Field(default=2000, ge=0, description="How long the 'saved' status is shown")
    undo_limit: int = Field(default=50, ge=1)
    api_url: str = Field(default="http://localhost:8080", description="Base URL of the page-builder storage API")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BuilderSettings":
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        for field, variable in (
            ("debounce_ms", "PAGE_BUILDER_DEBOUNCE_MS"),
            ("saved_display_ms", "PAGE_BUILDER_SAVED_DISPLAY_MS"),
            ("undo_limit", "PAGE_BUILDER_UNDO_LIMIT"),
            ("api_url", "PAGE_BUILDER_API_URL"),
        ):
            if variable in env:
                values[field] = env[variable]
        return cls.model_validate(values)


__all__ = ["BuilderSettings"]
