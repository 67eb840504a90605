#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Water Beaker Simulation Engine
================================================================================

Project:        Water Phase Canvas
Module:         simulation.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Per-frame driver loop. Each tick:
1. Integrate temperature from the heater/cooler input levels
2. Derive liquid, ice and thermometer rendering parameters
3. Step the bubble and steam particle systems
4. Compute the property table and warnings

Elapsed time comes from a monotonic clock and is clamped so that a
suspended or throttled host cannot produce a huge single step.
"""

import logging
import time
import numpy as np
from typing import Tuple, Optional, Callable, List
from dataclasses import dataclass, field

from .physics import (
    PhysicsConstants,
    DEFAULT_CONSTANTS,
    ThermoProperties,
    advance_temperature,
    calculate_properties
)
from .thermodynamics import (
    Phase,
    VisualParams,
    ThermometerReading,
    DisplayReadout,
    PhaseTransitionTracker,
    render_phase,
    thermometer_reading,
    format_display
)
from .particles import BubbleSystem, SteamSystem, CircleCommand, GradientCommand

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Configuration for the beaker simulation."""
    # Drawing surfaces (pixels)
    canvas_size: Tuple[float, float] = (300.0, 400.0)
    steam_size: Optional[Tuple[float, float]] = None  # Defaults to canvas_size

    initial_temperature: float = 20.0

    # Largest elapsed time integrated in one tick (seconds)
    max_frame_time: float = 0.1

    # Steam spawn trials per tick
    max_steam_per_tick: int = 1

    seed: Optional[int] = None

    def __post_init__(self):
        if self.max_frame_time <= 0:
            raise ValueError("max_frame_time must be positive")
        if self.max_steam_per_tick < 0:
            raise ValueError("max_steam_per_tick must be non-negative")
        _check_size(self.canvas_size)
        if self.steam_size is not None:
            _check_size(self.steam_size)


def _check_size(size: Tuple[float, float]):
    width, height = size
    if width < 0 or height < 0:
        raise ValueError(f"Surface size must be non-negative, got {size}")


@dataclass
class SimulationState:
    """Current state of the simulation."""
    temperature: float = 20.0
    is_heating: bool = False
    is_cooling: bool = False
    volume: float = 1.0
    bubbles: BubbleSystem = field(default_factory=BubbleSystem)
    steam: SteamSystem = field(default_factory=SteamSystem)
    last_update_time: Optional[float] = None
    time: float = 0.0
    step: int = 0

    @property
    def n_particles(self) -> int:
        return len(self.bubbles) + len(self.steam)


@dataclass
class Frame:
    """Everything produced by one tick."""
    time: float
    step: int
    temperature: float
    elapsed: float
    visual: VisualParams
    thermometer: ThermometerReading
    properties: ThermoProperties
    display: DisplayReadout
    bubble_commands: List[CircleCommand]
    steam_commands: List[GradientCommand]
    transition: Optional[Tuple[Phase, Phase]] = None

    @property
    def phase(self) -> Phase:
        return self.visual.phase


class WaterSimulation:
    """
    Water heating/cooling simulation engine.

    Owns the single SimulationState and advances it once per tick. Input
    handlers only flip ``is_heating``/``is_cooling``; the change takes
    effect on the next tick.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        constants: PhysicsConstants = DEFAULT_CONSTANTS,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.config = config or SimulationConfig()
        self.constants = constants
        self.rng = rng if rng is not None else np.random.default_rng(self.config.seed)
        self.clock = clock

        self.canvas_size = tuple(self.config.canvas_size)
        self.steam_size = tuple(self.config.steam_size or self.config.canvas_size)

        self.tracker = PhaseTransitionTracker()
        self.state: SimulationState = self._new_state(self.config.initial_temperature)
        self.frame: Optional[Frame] = None

    def _new_state(self, temperature: float) -> SimulationState:
        c = self.constants
        temperature = min(c.max_temp, max(c.min_temp, float(temperature)))
        return SimulationState(
            temperature=temperature,
            volume=render_phase(temperature, c, self.base_height).volume,
            bubbles=BubbleSystem(c, self.rng),
            steam=SteamSystem(c, self.rng, self.config.max_steam_per_tick)
        )

    @property
    def base_height(self) -> float:
        """Liquid fill height at ambient temperature."""
        return float(self.canvas_size[1])

    def reset(self, temperature: Optional[float] = None) -> SimulationState:
        """Start over from ``temperature`` (default: configured initial)."""
        if temperature is None:
            temperature = self.config.initial_temperature
        self.state = self._new_state(temperature)
        self.tracker.clear()
        self.frame = None
        return self.state

    def set_heating(self, active: bool):
        self.state.is_heating = bool(active)

    def set_cooling(self, active: bool):
        self.state.is_cooling = bool(active)

    def resize(self, width: float, height: float):
        """Resize the bubble/liquid surface. Zero sizes are allowed."""
        _check_size((width, height))
        self.canvas_size = (float(width), float(height))

    def resize_steam(self, width: float, height: float):
        """Resize the steam surface. Zero sizes are allowed."""
        _check_size((width, height))
        self.steam_size = (float(width), float(height))

    def tick(self, now: Optional[float] = None) -> Frame:
        """
        Advance by the wall-clock time since the previous tick.

        Args:
            now: Current monotonic time in seconds (default: ``clock()``)

        Returns:
            The new Frame
        """
        if now is None:
            now = self.clock()

        last = self.state.last_update_time
        if last is None or now < last:
            elapsed = 0.0
        else:
            elapsed = now - last
        self.state.last_update_time = now if last is None else max(last, now)

        if elapsed > self.config.max_frame_time:
            logger.debug("Clamping frame time %.3fs to %.3fs", elapsed, self.config.max_frame_time)
            elapsed = self.config.max_frame_time

        return self.step(elapsed)

    def step(self, elapsed: float) -> Frame:
        """
        Advance the simulation by exactly ``elapsed`` seconds.

        Negative values are treated as zero.

        Returns:
            The new Frame
        """
        elapsed = max(0.0, float(elapsed))

        state = self.state
        c = self.constants

        advance_temperature(state, elapsed, c)

        visual = render_phase(state.temperature, c, self.base_height)
        state.volume = visual.volume

        state.time += elapsed
        state.step += 1

        width, height = self.canvas_size
        bubble_commands = state.bubbles.step(state.temperature, elapsed, state.time, width, height)
        width, height = self.steam_size
        steam_commands = state.steam.step(state.temperature, elapsed, state.time, width, height)

        properties = calculate_properties(state.temperature, state.volume, c)

        transition = self.tracker.update(state.time, state.temperature, visual.phase)
        if transition is not None:
            logger.info(
                "Phase transition %s -> %s at T=%.2f (t=%.2fs)",
                transition[0].value, transition[1].value, state.temperature, state.time
            )

        self.frame = Frame(
            time=state.time,
            step=state.step,
            temperature=state.temperature,
            elapsed=elapsed,
            visual=visual,
            thermometer=thermometer_reading(state.temperature, c),
            properties=properties,
            display=format_display(properties, c),
            bubble_commands=bubble_commands,
            steam_commands=steam_commands,
            transition=transition
        )
        return self.frame

    def run(self, n_ticks: int, dt: float = 1.0 / 60.0) -> Frame:
        """Run ``n_ticks`` steps of ``dt`` seconds; returns the last Frame."""
        frame = self.frame
        for _ in range(n_ticks):
            frame = self.step(dt)
        return frame


def create_simulation(
    temperature: float = 20.0,
    canvas_size: Tuple[float, float] = (300.0, 400.0),
    seed: Optional[int] = None,
    max_frame_time: float = 0.1
) -> WaterSimulation:
    """
    Create a simulation starting at ``temperature``.

    Args:
        temperature: Initial temperature
        canvas_size: (width, height) of the drawing surfaces
        seed: Random seed for particle spawning
        max_frame_time: Largest step integrated per tick (seconds)

    Returns:
        Initialized WaterSimulation
    """
    config = SimulationConfig(
        canvas_size=canvas_size,
        initial_temperature=temperature,
        max_frame_time=max_frame_time,
        seed=seed
    )
    return WaterSimulation(config)
