"""Generation job configuration.

Values come from (in order of precedence) explicit arguments, a JSON config
file, or SCREENPLAY_SPEECH_* environment variables.  Environment variables
are read only when from_env() is called; nothing is loaded at import time.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from screenplay_speech.speech.rules import DEFAULT_RULE_VERSION, RULE_SETS

ENV_PREFIX = "SCREENPLAY_SPEECH_"
DEFAULT_CHECKPOINT_INTERVAL = 50


class JobConfig(BaseModel):
    """Rule version, checkpoint cadence and speaker aliases for one job."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rule_version: str = DEFAULT_RULE_VERSION
    checkpoint_interval: PositiveInt = DEFAULT_CHECKPOINT_INTERVAL
    aliases: Dict[str, str] = Field(default_factory=dict)

    @field_validator("rule_version")
    @classmethod
    def _known_rule_version(cls, value: str) -> str:
        if value not in RULE_SETS:
            raise ValueError(
                f"unknown rule version {value!r}; known versions: {sorted(RULE_SETS)}"
            )
        return value

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "JobConfig":
        """Build a config from SCREENPLAY_SPEECH_RULE_VERSION and
        SCREENPLAY_SPEECH_CHECKPOINT_INTERVAL; unset variables keep defaults.
        """
        env = os.environ if environ is None else environ
        data: Dict[str, str] = {}
        rule_version = env.get(f"{ENV_PREFIX}RULE_VERSION")
        if rule_version:
            data["rule_version"] = rule_version
        interval = env.get(f"{ENV_PREFIX}CHECKPOINT_INTERVAL")
        if interval:
            data["checkpoint_interval"] = interval
        return cls.model_validate(data)


def load_job_config(path: Union[str, Path]) -> JobConfig:
    """Load a JobConfig from a JSON file.

    Raises:
        FileNotFoundError: *path* does not exist.
        json.JSONDecodeError: the file is not valid JSON.
        pydantic.ValidationError: the content does not describe a JobConfig.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return JobConfig.model_validate(data)
