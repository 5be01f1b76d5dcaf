"""Scene and viewer configuration."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, Field

from scene import Point2D, Scene, Wall


class WallConfig(BaseModel):
    """Axis-aligned rectangle, top-left corner plus size."""
    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)

    def build(self) -> Wall:
        return Wall(self.x, self.y, self.width, self.height)


class SceneConfig(BaseModel):
    """Viewport size and the static walls inside it."""
    width: float = Field(default=800.0, gt=0)
    height: float = Field(default=600.0, gt=0)
    enclose: bool = True                 # Add a wall around the whole viewport
    walls: list[WallConfig] = Field(
        default_factory=lambda: [WallConfig(x=120, y=100, width=150, height=250)]
    )

    def build(self) -> Scene:
        return Scene(
            width=self.width,
            height=self.height,
            walls=[w.build() for w in self.walls],
            enclose=self.enclose,
        )


class ViewConfig(BaseModel):
    """Rendering and frame-clock options."""
    fps: float = Field(default=60.0, gt=0)
    show_rays: bool = True               # White probe lines
    show_hits: bool = True               # Magenta markers on every intersection
    fill: bool = False                   # Fill the visibility polygon
    background: str = "#404040"
    tolerance: float = Field(default=1e-6, ge=0)

    @property
    def interval_ms(self) -> int:
        return max(1, int(round(1000.0 / self.fps)))


class PathConfig(BaseModel):
    """Scripted observer walk used instead of the mouse."""
    waypoints: list[tuple[float, float]] = Field(min_length=2)
    speed: float = Field(default=100.0, gt=0)
    loop: bool = True

    def points(self) -> list[Point2D]:
        return [Point2D(x, y) for x, y in self.waypoints]


class AppConfig(BaseModel):
    scene: SceneConfig = Field(default_factory=SceneConfig)
    view: ViewConfig = Field(default_factory=ViewConfig)
    path: PathConfig | None = None


def load_config(path: str | Path | None = None) -> AppConfig:
    """Read an ``AppConfig`` from JSON, or return the defaults."""
    if path is None:
        return AppConfig()
    with open(path, "r") as f:
        data = json.load(f)
    return AppConfig.model_validate(data)
