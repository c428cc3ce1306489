import os
from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = 1


class SamplerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    target_length_m: float = 10.0

    @field_validator("target_length_m")
    @classmethod
    def _positive(cls, v: float) -> float:
        if not isfinite(v) or v <= 0:
            raise ValueError("target_length_m must be a positive finite number")
        return v


class ConfidenceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    clamp: bool = False  # cut negative confidences to 0


# ----------------- STORES ---------------------


class PickleSourceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["pickle"] = "pickle"
    file: str
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return os.path.expandvars(os.path.expanduser(v))


class NodeStoreMemoryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"
    nodes: dict[int, tuple[float, float]] = Field(default_factory=dict)  # id -> (lon, lat)


class NodeStorePickleModel(PickleSourceModel):
    pass


NodeStoreUnion = Annotated[
    NodeStoreMemoryModel | NodeStorePickleModel,
    Field(discriminator="kind"),
]


class GeometryStoreMemoryModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["memory"] = "memory"
    edges: dict[int, list[int]] = Field(default_factory=dict)  # edge id -> shape node ids


class GeometryStorePickleModel(PickleSourceModel):
    pass


GeometryStoreUnion = Annotated[
    GeometryStoreMemoryModel | GeometryStorePickleModel,
    Field(discriminator="kind"),
]


# ------------------------------------------------------------------


class GuidanceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    run_id: str = "local"
    sampler: SamplerModel = Field(default_factory=SamplerModel)
    confidence: ConfidenceModel = Field(default_factory=ConfidenceModel)
    log: LogModel = Field(default_factory=LogModel)
    nodes: NodeStoreUnion = Field(default_factory=NodeStoreMemoryModel)
    geometry: GeometryStoreUnion = Field(default_factory=GeometryStoreMemoryModel)
