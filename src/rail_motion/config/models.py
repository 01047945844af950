import os
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ClockModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    epoch: tuple[int, int, int, int, int, int] | None = None  # None => wall "now" at build
    realtime: bool = False


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=60, ge=1)


# ----------------- STATIC RESOURCES ---------------------


def _expand(v: str) -> str:
    return os.path.expandvars(os.path.expanduser(v))


class GeometryByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    must_exist: bool = True

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return _expand(v)


class GeometryInline(BaseModel):
    """A list of GeoJSON LineString features, as found in the geometry file."""

    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    features: list[dict[str, Any]] = Field(default_factory=list)


class GeometryByName(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["name"] = "name"
    name: str


GeometryRef = Annotated[
    GeometryByPath | GeometryInline | GeometryByName, Field(discriminator="by")
]


class StationsByPath(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["path"] = "path"
    file: str
    aliases: dict[str, str] = Field(default_factory=dict)

    @field_validator("file")
    @classmethod
    def _expand(cls, v: str) -> str:
        return _expand(v)


class StationsInline(BaseModel):
    model_config = ConfigDict(extra="forbid")
    by: Literal["inline"] = "inline"
    coordinates: dict[str, tuple[float, float]] = Field(default_factory=dict)  # name -> (lon, lat)
    aliases: dict[str, str] = Field(default_factory=dict)


StationsRef = Annotated[StationsByPath | StationsInline, Field(discriminator="by")]


# ----------------- ANIMATION ---------------------


class AnimationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    duration_s: float = Field(default=14.0, gt=0)
    smooth_time_s: float = Field(default=0.5, gt=0)
    max_dt_s: float = Field(default=0.1, gt=0)  # frame delta cap after a stall
    easing: Literal["ease_in_out_quad", "ease_in_out_sine", "ease_out_cubic", "linear"] = (
        "ease_in_out_quad"
    )
    heading_window: float = Field(default=0.05, gt=0, le=0.5)
    overshoot_eps: float = Field(default=1e-12, ge=0)


class TrailModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_len: int = Field(default=20, ge=1)
    min_step: float = Field(default=3e-5, ge=0)  # Manhattan, degrees
    min_render_len: int = Field(default=2, ge=0)  # expose trails strictly longer than this


class FrameModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    hz: float = Field(default=60.0, gt=0)


# ----------------- PATH RESOLVERS ---------------------


class ResolverTrackModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["track"] = "track"


class ResolverStraightModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["straight"] = "straight"


ResolverUnion = Annotated[
    ResolverTrackModel | ResolverStraightModel, Field(discriminator="kind")
]


# ------------------ POLICIES -----------------------------


class EvictionImmediateModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["immediate"] = "immediate"


class EvictionGraceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["grace"] = "grace"
    grace_s: float = 60.0

    @field_validator("grace_s")
    def _nonneg(cls, v: float, info: ValidationInfo) -> float:
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v


EvictionUnion = Annotated[
    EvictionImmediateModel | EvictionGraceModel, Field(discriminator="kind")
]


# ------------------------------------------------------------------


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    run_id: str
    clock: ClockModel = ClockModel()
    log: LogModel = LogModel()
    geometry: GeometryRef
    stations: StationsRef
    animation: AnimationModel = AnimationModel()
    trail: TrailModel = TrailModel()
    frames: FrameModel = FrameModel()
    resolver: ResolverUnion = Field(default_factory=ResolverTrackModel)
    eviction: EvictionUnion = Field(default_factory=EvictionImmediateModel)
