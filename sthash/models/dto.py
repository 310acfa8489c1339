from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from typing import Any, Dict, List, Optional

from sthash.core.errors import ConfigurationError, InvalidArgument
from sthash.utils.coordinates import parse_latlng

# --- Core Data Models ---

class SpacetimeRecord(BaseModel):
    """A time interval spent at a single location."""
    begin: float = Field(..., description="Start of the interval, Unix seconds.", allow_inf_nan=False)
    end: float = Field(..., description="End of the interval, Unix seconds.", allow_inf_nan=False)
    lat: float = Field(..., description="Latitude in decimal degrees.", allow_inf_nan=False)
    lng: float = Field(..., description="Longitude in decimal degrees.", allow_inf_nan=False)

    @model_validator(mode="before")
    @classmethod
    def _split_latlng(cls, data: Any) -> Any:
        # {"latlng": "37.47, 126.96"} or {"latlng": [37.47, 126.96]}
        if isinstance(data, dict) and "latlng" in data and "lat" not in data and "lng" not in data:
            data = dict(data)
            try:
                data["lat"], data["lng"] = parse_latlng(data.pop("latlng"))
            except InvalidArgument as e:
                raise ValueError(e.detail) from e
        return data

    @model_validator(mode="after")
    def _check_interval(self) -> "SpacetimeRecord":
        if self.begin > self.end:
            raise ValueError(f"begin ({self.begin}) is after end ({self.end})")
        return self

    @classmethod
    def build(cls, **fields) -> "SpacetimeRecord":
        """Construct a record, reporting bad input as InvalidArgument."""
        try:
            return cls(**fields)
        except ValidationError as e:
            raise InvalidArgument(str(e)) from e


class HashConfig(BaseModel):
    """Parameters shared by both parties for one hashing call."""
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, repr=False, description="HMAC secret.")
    time_step_minutes: float = Field(..., gt=0, allow_inf_nan=False)
    latlng_precision: int = Field(..., description="Negative values keep that many digits after the decimal point.")
    spread_out: int = Field(..., ge=0)

    @classmethod
    def build(cls, **fields) -> "HashConfig":
        """Construct a config, reporting bad input as ConfigurationError / InvalidArgument."""
        if not fields.get("key"):
            raise ConfigurationError("A non-empty hash key is required")
        try:
            return cls(**fields)
        except ValidationError as e:
            raise InvalidArgument(str(e)) from e

    @classmethod
    def from_settings(
        cls,
        settings,
        key: Optional[str] = None,
        time_step_minutes: Optional[float] = None,
        latlng_precision: Optional[int] = None,
        spread_out: Optional[int] = None,
    ) -> "HashConfig":
        """Fill any parameter not given explicitly from the service settings."""
        return cls.build(
            key=key or settings.HASH_KEY,
            time_step_minutes=settings.TIME_STEP_MINUTES if time_step_minutes is None else time_step_minutes,
            latlng_precision=settings.LATLNG_PRECISION if latlng_precision is None else latlng_precision,
            spread_out=settings.SPREAD_OUT if spread_out is None else spread_out,
        )

# --- API Request Models ---

class HashOverrides(BaseModel):
    """Per-request hashing parameters; anything left out comes from the settings."""
    key: Optional[str] = Field(None, repr=False, description="HMAC secret. Falls back to HASH_KEY.")
    time_step_minutes: Optional[float] = None
    latlng_precision: Optional[int] = None
    spread_out: Optional[int] = None

    def to_config(self, settings) -> HashConfig:
        return HashConfig.from_settings(
            settings,
            key=self.key,
            time_step_minutes=self.time_step_minutes,
            latlng_precision=self.latlng_precision,
            spread_out=self.spread_out,
        )


class HashRequest(HashOverrides):
    """Request body for /api/hash."""
    records: List[SpacetimeRecord] = Field(..., min_length=1)


class TimelineHashRequest(HashOverrides):
    """Request body for /api/hash/timeline, a location history export."""
    timeline_objects: List[Dict[str, Any]] = Field(..., alias="timelineObjects")

# --- Public Data Transfer Objects (DTOs) ---

class HashResponse(BaseModel):
    """One token list per input record, in input order."""
    tokens: List[List[str]]
    count: int = Field(..., description="Number of token lists, i.e. records hashed.")


class ConfigResponse(BaseModel):
    """Effective defaults; the key itself is never returned."""
    time_step_minutes: float
    latlng_precision: int
    spread_out: int
    key_configured: bool
    cell_height_m: float = Field(..., description="North-south size of a grid cell at the equator.")
    cell_width_m: float = Field(..., description="East-west size of a grid cell at the equator.")

# --- Error Response Model ---

class ErrorResponse(BaseModel):
    """Standardized error response model."""
    error: str = Field(..., description="A machine-readable error code.")
    detail: str = Field(..., description="A human-readable explanation.")
    error_id: Optional[str] = Field(None, description="Reference for unexpected server errors.")
