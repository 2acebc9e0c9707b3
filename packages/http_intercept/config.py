from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "HTTP_INTERCEPT_"


class HttpSettings(BaseModel):
    base_url: str = ""
    default_headers: dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = Field(default=None, gt=0)
    max_redispatch_depth: Optional[int] = Field(default=None, ge=0)

    @field_validator("default_headers", mode="before")
    @classmethod
    def _parse_default_headers(cls, value):
        if value is None or value == "":
            return {}
        if isinstance(value, str):
            try:
                value = json.loads(value)
            except Exception as exc:
                raise ValueError(
                    "default_headers must be a JSON object string or dict"
                ) from exc
        if isinstance(value, dict):
            return {str(k).lower(): str(v) for k, v in value.items()}
        raise ValueError("default_headers must be a JSON object string or dict")

    @classmethod
    def from_env(
        cls,
        env_file: Optional[Path | str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "HttpSettings":
        """Build settings from ``HTTP_INTERCEPT_*`` environment variables.

        ``env_file`` is read with python-dotenv without touching
        ``os.environ``; values from ``environ`` (the process environment by
        default) take precedence over the file.
        """

        source: dict[str, str] = {}
        if env_file is not None and Path(env_file).exists():
            source.update(
                {k: v for k, v in dotenv_values(env_file).items() if v is not None}
            )
        source.update(os.environ if environ is None else environ)
        values = {}
        for name in cls.model_fields:
            raw = source.get(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls.model_validate(values)
