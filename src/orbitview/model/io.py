"""
Input/Output Manager (JSON)
Validates external scene payloads and handles loading/exporting .json scenes.
"""
from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from orbitview.model.scene import Entity, Scene, SceneMetadata

# Get module logger
logger = logging.getLogger(__name__)


class SceneValidationError(ValueError):
    """Raised when a scene payload does not match the expected schema."""

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.details: List[Dict[str, Any]] = details or []


# -------------------- Payload Schema --------------------

def _finite_triplet(value: Any) -> Tuple[float, float, float]:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError("expected exactly three coordinates [x, y, z]")
    try:
        coords = tuple(float(v) for v in value)
    except (TypeError, ValueError):
        raise ValueError("coordinates must be numbers") from None
    if not all(math.isfinite(c) for c in coords):
        raise ValueError("coordinates must be finite numbers")
    return coords  # type: ignore[return-value]


class AsteroidPayload(BaseModel):
    """One entry of the 'asteroids' array."""
    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    name: str
    position: Tuple[float, float, float]
    size: float
    orbit: List[Tuple[float, float, float]] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Numeric ids are common in exported catalogues
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("position", mode="before")
    @classmethod
    def _check_position(cls, value: Any) -> Tuple[float, float, float]:
        return _finite_triplet(value)

    @field_validator("orbit", mode="before")
    @classmethod
    def _check_orbit(cls, value: Any) -> List[Tuple[float, float, float]]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise ValueError("orbit must be a list of [x, y, z] points")
        return [_finite_triplet(pt) for pt in value]

    @field_validator("size")
    @classmethod
    def _check_size(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0.0:
            raise ValueError("size must be a positive finite number")
        return value


class MetadataPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: Optional[int] = Field(default=None, ge=0)
    time_point: Optional[str] = None
    coordinate_system: Optional[str] = None


class ScenePayload(BaseModel):
    """Top-level scene document: {'asteroids': [...], 'metadata': {...}}."""
    model_config = ConfigDict(extra="ignore")

    asteroids: List[AsteroidPayload] = Field(default_factory=list)
    metadata: MetadataPayload = Field(default_factory=MetadataPayload)

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "ScenePayload":
        seen: set[str] = set()
        for asteroid in self.asteroids:
            if asteroid.id in seen:
                raise ValueError(f"duplicate asteroid id '{asteroid.id}'")
            seen.add(asteroid.id)
        return self

    def to_scene(self) -> Scene:
        entities = tuple(
            Entity(
                id=a.id,
                name=a.name,
                position=a.position,
                size=a.size,
                orbit=tuple(a.orbit),
            )
            for a in self.asteroids
        )
        count = self.metadata.count if self.metadata.count is not None else len(entities)
        metadata = SceneMetadata(
            count=count,
            time_point=self.metadata.time_point,
            coordinate_system=self.metadata.coordinate_system,
        )
        return Scene(entities=entities, metadata=metadata)


# -------------------- Manager --------------------

class SceneIO:

    @staticmethod
    def parse(payload: Any) -> Scene:
        """Validates a decoded JSON payload and converts it to a Scene."""
        if not isinstance(payload, dict):
            msg = f"Scene payload must be a JSON object, got {type(payload).__name__}."
            logger.error(msg)
            raise SceneValidationError(msg)

        try:
            validated = ScenePayload.model_validate(payload)
        except ValidationError as e:
            details = e.errors(include_url=False)
            first = details[0] if details else {}
            location = ".".join(str(part) for part in first.get("loc", ()))
            msg = f"Invalid scene payload at '{location}': {first.get('msg', e)}"
            logger.error(f"{msg} ({len(details)} error(s) total)")
            raise SceneValidationError(msg, details=details) from e

        scene = validated.to_scene()
        logger.debug(f"Parsed scene with {len(scene)} entities.")
        return scene

    @staticmethod
    def load(filepath: str) -> Scene:
        logger.info(f"Loading scene from: {filepath}")
        if not os.path.exists(filepath):
            msg = f"Scene file '{filepath}' does not exist."
            logger.error(msg)
            raise SceneValidationError(msg)

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            msg = f"File '{filepath}' is not a readable JSON scene: {e}"
            logger.error(msg)
            raise SceneValidationError(msg) from e

        scene = SceneIO.parse(payload)
        logger.info(f"Scene loaded: {len(scene)} entities.")
        return scene

    @staticmethod
    def export(scene: Scene, filepath: str) -> None:
        """Writes the scene as pretty-printed JSON (same shape as the input)."""
        logger.info(f"Exporting scene to: {filepath}")
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(scene.to_dict(), f, indent=2)
        except OSError:
            logger.exception("Failed to export scene")
            raise
        logger.info(f"Scene exported ({len(scene)} entities).")
