"""Pydantic models for `capsule.toml` and the deployment document.

Both documents are TOML. Keys the models don't know about are kept as
extras so that a config written back out loses nothing.
"""

from __future__ import annotations

import tomllib
from enum import Enum
from pathlib import Path
from typing import Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, model_validator


class TemplateType(str, Enum):
    """Language template a contract was generated from."""

    RUST = "Rust"
    C = "C"
    C_SHARED_LIB = "CSharedLib"


class Contract(BaseModel):
    """A contract declared in the project."""

    model_config = ConfigDict(extra="allow")

    name: str
    template_type: TemplateType = TemplateType.RUST


class RustConfig(BaseModel):
    """The `[rust]` table of `capsule.toml`."""

    model_config = ConfigDict(extra="allow")

    workspace_dir: str | None = None
    toolchain: str | None = None
    docker_image: str | None = None


class Config(BaseModel):
    """Project config loaded from `capsule.toml`."""

    model_config = ConfigDict(extra="allow")

    version: str
    deployment: Path
    contracts: list[Contract] = Field(default_factory=list)
    rust: RustConfig = Field(default_factory=RustConfig)

    @property
    def workspace_dir(self) -> str | None:
        return self.rust.workspace_dir

    @classmethod
    def from_toml(cls, text: str) -> Config:
        """Parse config text.

        Raises:
            tomllib.TOMLDecodeError: If the text is not TOML
            pydantic.ValidationError: If the document doesn't match the schema
        """
        return cls.model_validate(tomllib.loads(text))

    def to_toml(self) -> str:
        """Serialize back to `capsule.toml` text, omitting unset options."""
        data = self.model_dump(exclude_none=True)
        data["deployment"] = self.deployment.as_posix()
        for contract in data["contracts"]:
            contract["template_type"] = contract["template_type"].value
        return tomli_w.dumps(data)


class ScriptConfig(BaseModel):
    """A lock script reference."""

    model_config = ConfigDict(extra="allow")

    code_hash: str
    hash_type: Literal["type", "data", "data1"] = "type"
    args: str = "0x"


class CellLocation(BaseModel):
    """Where a cell's data comes from: a local file or an existing out point."""

    model_config = ConfigDict(extra="forbid")

    file: str | None = None
    tx_hash: str | None = None
    index: int | None = None

    @model_validator(mode="after")
    def validate_one_source(self) -> CellLocation:
        has_file = self.file is not None
        has_out_point = self.tx_hash is not None or self.index is not None

        if has_file and has_out_point:
            msg = "location takes either file or tx_hash + index, not both"
            raise ValueError(msg)
        if not has_file and (self.tx_hash is None or self.index is None):
            msg = "location requires file, or both tx_hash and index"
            raise ValueError(msg)
        return self


class CellDeployment(BaseModel):
    """A cell to deploy."""

    model_config = ConfigDict(extra="allow")

    name: str
    location: CellLocation
    enable_type_id: bool = False


class DepGroupDeployment(BaseModel):
    """A dep group bundling already named cells."""

    model_config = ConfigDict(extra="allow")

    name: str
    cells: list[str] = Field(default_factory=list)


class Deployment(BaseModel):
    """Deployment document named by `Config.deployment`."""

    model_config = ConfigDict(extra="allow")

    lock: ScriptConfig | None = None
    cells: list[CellDeployment] = Field(default_factory=list)
    dep_groups: list[DepGroupDeployment] = Field(default_factory=list)

    @classmethod
    def from_toml(cls, text: str) -> Deployment:
        """Parse deployment text.

        Raises:
            tomllib.TOMLDecodeError: If the text is not TOML
            pydantic.ValidationError: If the document doesn't match the schema
        """
        return cls.model_validate(tomllib.loads(text))
