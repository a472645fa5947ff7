from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, field_validator, model_validator

from render.gradient import Gradient
from shared.constants import (
    DEFAULT_MAX_DISTANCE_KM,
    DEFAULT_MAX_SENSOR_VALUE,
    DEFAULT_MIN_RADIUS_KM,
    DEFAULT_PALETTE,
    MAX_OUTPUT_PIXELS,
    SensorItem,
    default_sensor_item,
)
from shared.errors import ConfigurationError


class SensorSample(BaseModel):
    """Одно показание датчика: идентификатор, положение (градусы) и значение."""

    model_config = {'frozen': True}

    id: int
    lon: float
    lat: float
    value: float


@dataclass(frozen=True)
class RenderRegion:
    """
    Bounding box of a rendering job plus the two interpolation cutoffs.

    ``min_radius`` and ``max_distance`` are kilometres; a query point closer
    than ``min_radius`` to a sensor takes that sensor's reading, a point
    farther than ``max_distance`` from every sensor gets no data.
    """

    west: float
    east: float
    south: float
    north: float
    min_radius: float = DEFAULT_MIN_RADIUS_KM
    max_distance: float = DEFAULT_MAX_DISTANCE_KM

    def __post_init__(self) -> None:
        if not self.west < self.east:
            msg = f'west ({self.west}) must be less than east ({self.east})'
            raise ConfigurationError(msg)
        if not self.south < self.north:
            msg = f'south ({self.south}) must be less than north ({self.north})'
            raise ConfigurationError(msg)
        if not 0.0 <= self.min_radius < self.max_distance:
            msg = (
                f'expected 0 <= min_radius < max_distance, '
                f'got min_radius={self.min_radius} max_distance={self.max_distance}'
            )
            raise ConfigurationError(msg)

    @property
    def center_lon(self) -> float:
        return (self.west + self.east) / 2.0

    @property
    def center_lat(self) -> float:
        return (self.south + self.north) / 2.0

    @property
    def min_radius_sq(self) -> float:
        return self.min_radius * self.min_radius

    @property
    def max_distance_sq(self) -> float:
        return self.max_distance * self.max_distance


def default_palette() -> list[tuple[float, int, int, int, int]]:
    return [(t, *rgba) for t, rgba in DEFAULT_PALETTE]


class RenderJob(BaseModel):
    """
    Настройки одного задания рендеринга.

    Плоская модель; секционированный вид для TOML строится в
    domain.toml_sections.
    """

    model_config = {
        'extra': 'ignore',  # игнорировать лишние поля из профилей
    }

    name: str

    # Границы области (градусы WGS84)
    west: float
    east: float
    south: float
    north: float

    # Пороги интерполяции (км)
    min_radius: float = DEFAULT_MIN_RADIUS_KM
    max_distance: float = DEFAULT_MAX_DISTANCE_KM

    # Размер растра (px)
    width: int
    height: int
    # Число потоков обхода растра (None: по числу CPU)
    workers: int | None = None

    # Опорные точки шкалы: [порог, R, G, B, A]
    palette: list[tuple[float, int, int, int, int]] = default_palette()

    # Фильтры выборки датчиков
    max_value: float = DEFAULT_MAX_SENSOR_VALUE
    blacklist: list[int] = []
    item: SensorItem = default_sensor_item()

    @field_validator('width', 'height')
    @classmethod
    def validate_raster_size(cls, v: int) -> int:
        if v <= 0:
            msg = 'Размер растра должен быть положительным'
            raise ValueError(msg)
        return v

    @field_validator('workers')
    @classmethod
    def validate_workers(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            msg = 'Число потоков должно быть не меньше 1'
            raise ValueError(msg)
        return v

    @field_validator('max_value')
    @classmethod
    def validate_max_value(cls, v: float) -> float:
        if v <= 0.0:
            msg = 'Порог значения датчика должен быть положительным'
            raise ValueError(msg)
        return v

    @field_validator('palette')
    @classmethod
    def validate_palette(
        cls, v: list[tuple[float, int, int, int, int]]
    ) -> list[tuple[float, int, int, int, int]]:
        # Gradient проверяет порядок порогов и диапазон каналов
        Gradient.from_palette(v)
        return v

    @model_validator(mode='after')
    def validate_region(self) -> RenderJob:
        _ = self.region
        if self.width * self.height > MAX_OUTPUT_PIXELS:
            msg = f'Растр {self.width}x{self.height} превышает {MAX_OUTPUT_PIXELS} px'
            raise ValueError(msg)
        return self

    @property
    def region(self) -> RenderRegion:
        return RenderRegion(
            west=self.west,
            east=self.east,
            south=self.south,
            north=self.north,
            min_radius=self.min_radius,
            max_distance=self.max_distance,
        )

    @property
    def gradient(self) -> Gradient:
        return Gradient.from_palette(self.palette)
