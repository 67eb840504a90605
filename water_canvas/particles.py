#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Bubble and Steam Particle Systems
================================================================================

Project:        Water Phase Canvas
Module:         particles.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Two lightweight particle systems drawn over the beaker:

- Bubbles rise through the liquid once the temperature passes the bubble
  threshold. Each bubble lives for 100 nominal frames.
- Steam puffs rise above the liquid at or above the boiling point and shrink
  exponentially until they are no longer visible.

Particles are stored as one NumPy array per field. Each tick runs in two
phases: every particle is advanced by a Numba kernel, then expired particles
are dropped with a boolean survival mask. Nothing is removed while the
kernel iterates, so no particle is skipped or updated twice.

Randomness comes from an injected ``numpy.random.Generator`` so spawning is
reproducible under a fixed seed.
"""

import numpy as np
from numba import jit
from typing import Tuple, Optional, List, Dict
from dataclasses import dataclass

from .physics import PhysicsConstants, DEFAULT_CONSTANTS

RGBA = Tuple[float, float, float, float]

# Bubble parameters
BUBBLE_SPAWN_CHANCE = 0.3     # Per-tick chance of a burst
BUBBLE_INTENSITY_SPAN = 30.0  # Degrees above threshold for intensity 1
BUBBLE_LIFE = 100.0           # Nominal frames
BUBBLE_TOP_MARGIN = -10.0     # Removed once above this y
BUBBLE_ALPHA_SCALE = 150.0

# Steam parameters
STEAM_INTENSITY_SPAN = 20.0
STEAM_SPAWN_SCALE = 0.5
STEAM_DECAY = 0.98            # Size multiplier per nominal frame
STEAM_VISIBILITY_FLOOR = 0.5
STEAM_MAX_SWAY = 0.02
STEAM_ALPHA = 0.3
STEAM_ALPHA_SIZE = 15.0


@dataclass
class Bubble:
    x: float
    y: float
    size: float
    speed: float
    life: float


@dataclass
class SteamParticle:
    x: float
    y: float
    size: float
    speed: float
    sway: float


@dataclass
class CircleCommand:
    """Filled circle of a single colour."""
    x: float
    y: float
    radius: float
    color: RGBA


@dataclass
class GradientCommand:
    """Filled circle fading radially from ``inner`` to ``outer``."""
    x: float
    y: float
    radius: float
    inner: RGBA
    outer: RGBA


@jit(nopython=True, cache=True)
def advance_bubbles(
    x: np.ndarray,
    y: np.ndarray,
    speed: np.ndarray,
    life: np.ndarray,
    frames: float,
    now: float
) -> None:
    """
    Rise, sway and age every bubble in place.

    The sway phase combines wall-clock time (seconds) with the bubble's
    index so neighbouring bubbles wobble out of step.
    """
    for i in range(x.shape[0]):
        y[i] -= speed[i] * frames
        x[i] += np.sin(now + i) * 0.5 * frames
        life[i] -= frames


@jit(nopython=True, cache=True)
def advance_steam(
    x: np.ndarray,
    y: np.ndarray,
    size: np.ndarray,
    speed: np.ndarray,
    sway: np.ndarray,
    frames: float,
    now_ms: float,
    decay: float
) -> None:
    """
    Rise, drift and shrink every steam particle in place.

    Size decays as decay^frames so the fade rate does not depend on
    how often the loop runs.
    """
    shrink = decay ** frames
    for i in range(x.shape[0]):
        y[i] -= speed[i] * frames
        x[i] += np.sin(now_ms * sway[i]) * 2.0 * frames
        size[i] *= shrink


class ParticleSystem:
    """
    Base class for a structure-of-arrays particle collection.

    Subclasses define ``fields`` and implement spawning, advancing, the
    survival test and draw command generation.
    """

    fields: Tuple[str, ...] = ()

    def __init__(
        self,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
        rng: Optional[np.random.Generator] = None
    ):
        self.constants = constants
        self.rng = rng if rng is not None else np.random.default_rng()
        self.data: Dict[str, np.ndarray] = {}
        self.clear()

    def __len__(self) -> int:
        return self.data[self.fields[0]].shape[0]

    def clear(self):
        """Remove every particle."""
        self.data = {name: np.empty(0, dtype=np.float64) for name in self.fields}

    def _append(self, **values: np.ndarray):
        for name in self.fields:
            new = np.asarray(values[name], dtype=np.float64)
            self.data[name] = np.concatenate((self.data[name], new))

    def _retain(self, mask: np.ndarray) -> int:
        """Keep only particles where ``mask`` is True; returns count removed."""
        removed = int(mask.shape[0] - np.count_nonzero(mask))
        if removed:
            self.data = {name: arr[mask] for name, arr in self.data.items()}
        return removed

    def spawn(self, temperature: float, width: float, height: float) -> int:
        raise NotImplementedError

    def advance(self, frames: float, now: float):
        raise NotImplementedError

    def alive_mask(self) -> np.ndarray:
        raise NotImplementedError

    def draw_commands(self) -> list:
        raise NotImplementedError

    def step(
        self,
        temperature: float,
        elapsed: float,
        now: float,
        width: float,
        height: float
    ) -> list:
        """
        Run one tick: spawn, advance, cull, then emit draw commands.

        Args:
            temperature: Current temperature
            elapsed: Seconds since the previous tick
            now: Wall-clock time in seconds (drives the sway phase)
            width: Drawing surface width (pixels)
            height: Drawing surface height (pixels)

        Returns:
            Draw commands for the surviving particles
        """
        frames = max(0.0, float(elapsed)) * self.constants.nominal_fps
        self.spawn(temperature, width, height)
        self.advance(frames, now)
        self._retain(self.alive_mask())
        return self.draw_commands()


class BubbleSystem(ParticleSystem):
    """Bubbles rising through hot water."""

    fields = ("x", "y", "size", "speed", "life")

    def intensity(self, temperature: float) -> float:
        return (temperature - self.constants.bubble_threshold) / BUBBLE_INTENSITY_SPAN

    def spawn(self, temperature: float, width: float, height: float) -> int:
        """
        Maybe spawn a burst of bubbles at the bottom of the surface.

        A burst happens with 30 % chance per tick above the bubble
        threshold and contains ceil(2 · intensity) bubbles.
        """
        if temperature <= self.constants.bubble_threshold:
            return 0
        if self.rng.random() >= BUBBLE_SPAWN_CHANCE:
            return 0

        intensity = self.intensity(temperature)
        count = int(np.ceil(2.0 * intensity))
        if count <= 0:
            return 0

        self._append(
            x=self.rng.random(count) * width,
            y=np.full(count, float(height)),
            size=self.rng.random(count) * 4.0 + 2.0 * intensity,
            speed=self.rng.random(count) * 3.0 + intensity,
            life=np.full(count, BUBBLE_LIFE)
        )
        return count

    def advance(self, frames: float, now: float):
        d = self.data
        advance_bubbles(d["x"], d["y"], d["speed"], d["life"], frames, now)

    def alive_mask(self) -> np.ndarray:
        d = self.data
        return (d["y"] >= BUBBLE_TOP_MARGIN) & (d["life"] > 0.0)

    def draw_commands(self) -> List[CircleCommand]:
        d = self.data
        alphas = np.clip(d["life"] / BUBBLE_ALPHA_SCALE, 0.0, 1.0)
        return [
            CircleCommand(x=float(x), y=float(y), radius=float(r), color=(1.0, 1.0, 1.0, float(a)))
            for x, y, r, a in zip(d["x"], d["y"], d["size"], alphas)
        ]

    def records(self) -> List[Bubble]:
        d = self.data
        return [Bubble(*map(float, row)) for row in zip(*(d[name] for name in self.fields))]


class SteamSystem(ParticleSystem):
    """Steam puffs rising from boiling water."""

    fields = ("x", "y", "size", "speed", "sway")

    def __init__(
        self,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
        rng: Optional[np.random.Generator] = None,
        max_spawn_per_tick: int = 1
    ):
        if max_spawn_per_tick < 0:
            raise ValueError("max_spawn_per_tick must be non-negative")
        self.max_spawn_per_tick = max_spawn_per_tick
        super().__init__(constants, rng)

    def intensity(self, temperature: float) -> float:
        return (temperature - self.constants.boiling_point) / STEAM_INTENSITY_SPAN

    def spawn(self, temperature: float, width: float, height: float) -> int:
        """
        Maybe spawn steam at the bottom of the surface.

        Each of ``max_spawn_per_tick`` trials succeeds with probability
        intensity · 0.5; the default of one trial gives at most one new
        particle per tick.
        """
        if temperature < self.constants.boiling_point or self.max_spawn_per_tick == 0:
            return 0

        intensity = self.intensity(temperature)
        trials = self.rng.random(self.max_spawn_per_tick)
        count = int(np.count_nonzero(trials < intensity * STEAM_SPAWN_SCALE))
        if count == 0:
            return 0

        self._append(
            x=self.rng.random(count) * width,
            y=np.full(count, float(height)),
            size=self.rng.random(count) * 10.0 + 5.0 * intensity,
            speed=self.rng.random(count) * 2.0 + intensity,
            sway=self.rng.random(count) * STEAM_MAX_SWAY
        )
        return count

    def advance(self, frames: float, now: float):
        d = self.data
        advance_steam(
            d["x"], d["y"], d["size"], d["speed"], d["sway"],
            frames, now * 1000.0, STEAM_DECAY
        )

    def alive_mask(self) -> np.ndarray:
        return self.data["size"] >= STEAM_VISIBILITY_FLOOR

    def draw_commands(self) -> List[GradientCommand]:
        d = self.data
        alphas = np.clip(STEAM_ALPHA * (d["size"] / STEAM_ALPHA_SIZE), 0.0, 1.0)
        return [
            GradientCommand(
                x=float(x), y=float(y), radius=float(r),
                inner=(1.0, 1.0, 1.0, float(a)),
                outer=(1.0, 1.0, 1.0, 0.0)
            )
            for x, y, r, a in zip(d["x"], d["y"], d["size"], alphas)
        ]

    def records(self) -> List[SteamParticle]:
        d = self.data
        return [SteamParticle(*map(float, row)) for row in zip(*(d[name] for name in self.fields))]
