"""
Generator configuration model — loaded from unity_constants.yml.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_FILE_NAME = "UnityConstants.cs"
DEFAULT_NAMESPACE = "UnityConstants"

_NAMESPACE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


class GeneratorConfig(BaseModel):
    """Per-project generator settings.

    Attributes:
        output:    Output path relative to the project root. When unset,
                   an existing ``file_name`` under ``scan_dir`` is reused.
        namespace: Wrapper namespace for the generated classes.
        file_name: Name of the generated file.
        scan_dir:  Directory (relative to the project root) searched for
                   an existing output file and for mixer/animator assets.
    """

    model_config = ConfigDict(extra="forbid")

    output: str | None = None
    namespace: str = DEFAULT_NAMESPACE
    file_name: str = DEFAULT_FILE_NAME
    scan_dir: str = "Assets"

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, v: str) -> str:
        if not _NAMESPACE_RE.match(v):
            raise ValueError(f"not a valid C# namespace: {v!r}")
        return v

    @field_validator("file_name")
    @classmethod
    def _check_file_name(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"file_name must be a bare file name: {v!r}")
        return v
