#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Phase Regimes and Display Readouts
================================================================================

Project:        Water Phase Canvas
Module:         thermodynamics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

This module turns the current temperature into everything the user sees
apart from the particles:
- Phase identification (frozen, normal, boiling)
- Liquid/ice fill heights and opacities
- Thermometer fill and colour
- The formatted property table and the freeze/boil warnings
- Phase transition tracking over time
"""

from typing import Tuple, Optional, List
from dataclasses import dataclass
from enum import Enum

from matplotlib.colors import hsv_to_rgb

from .physics import PhysicsConstants, DEFAULT_CONSTANTS, ThermoProperties, expansion_factor


class Phase(Enum):
    """Visual regimes of the water in the beaker."""
    FROZEN = "frozen"
    NORMAL = "normal"
    BOILING = "boiling"


@dataclass
class VisualParams:
    """Rendering parameters for the liquid and ice fills."""
    phase: Phase
    volume: float           # Expansion factor, becomes the simulated volume
    liquid_height: float    # Pixels
    liquid_opacity: float
    ice_height: float       # Pixels
    ice_opacity: float
    ice_fraction: float = 0.0
    evaporation: float = 0.0


@dataclass
class ThermometerReading:
    """Thermometer fill level (0-100 %) and colour."""
    percent: float
    hue: float
    rgb: Tuple[float, float, float]

    @property
    def css(self) -> str:
        return f"hsl({self.hue:.1f}, 100%, 50%)"


@dataclass
class DisplayReadout:
    """Presentation-rounded property table and warning flags."""
    celsius: str
    fahrenheit: str
    kelvin: str
    expansion: str
    stress: str
    work: str
    entropy: str
    freeze_warning: bool
    boil_warning: bool

    def rows(self) -> List[Tuple[str, str]]:
        """Table rows as (label, value) pairs."""
        return [
            ("Celsius", self.celsius),
            ("Fahrenheit", self.fahrenheit),
            ("Kelvin", self.kelvin),
            ("Volume Expansion", self.expansion),
            ("Thermal Stress", self.stress),
            ("Thermal Work", self.work),
            ("Entropy Change", self.entropy),
        ]


def identify_phase(temperature: float, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> Phase:
    """
    Identify the visual regime for a temperature.

    The three regimes are exhaustive and mutually exclusive: at or below
    freezing is frozen, at or above boiling is boiling, anything between is
    normal.
    """
    if temperature <= constants.freezing_point:
        return Phase.FROZEN
    if temperature >= constants.boiling_point:
        return Phase.BOILING
    return Phase.NORMAL


def render_phase(
    temperature: float,
    constants: PhysicsConstants = DEFAULT_CONSTANTS,
    base_height: float = 300.0
) -> VisualParams:
    """
    Derive liquid and ice fill parameters from temperature.

    Args:
        temperature: Current temperature
        constants: Physical constants
        base_height: Fill height at ambient temperature (pixels)

    Returns:
        VisualParams for exactly one phase regime
    """
    volume = expansion_factor(temperature, constants)
    liquid_height = base_height * volume
    phase = identify_phase(temperature, constants)

    if phase is Phase.FROZEN:
        ice_fraction = min(1.0, (constants.freezing_point - temperature) / 10.0 + 1.0)
        return VisualParams(
            phase=phase,
            volume=volume,
            liquid_height=liquid_height,
            liquid_opacity=0.0,
            ice_height=base_height * ice_fraction,
            ice_opacity=1.0,
            ice_fraction=ice_fraction
        )

    if phase is Phase.BOILING:
        evaporation = min(1.0, (temperature - constants.boiling_point) / 20.0)
        return VisualParams(
            phase=phase,
            volume=volume,
            liquid_height=liquid_height,
            liquid_opacity=1.0 - evaporation,
            ice_height=0.0,
            ice_opacity=0.0,
            evaporation=evaporation
        )

    return VisualParams(
        phase=phase,
        volume=volume,
        liquid_height=liquid_height,
        liquid_opacity=1.0,
        ice_height=0.0,
        ice_opacity=0.0
    )


def thermometer_reading(temperature: float, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> ThermometerReading:
    """
    Thermometer fill percentage and blue-to-red colour.

    hue = 240 - 2.4 · percent, i.e. blue at min_temp and red at max_temp.
    """
    percent = (temperature - constants.min_temp) / constants.temperature_range * 100.0
    hue = 240.0 - percent * 2.4
    # hsl(h, 100%, 50%) is the same colour as hsv(h, 100%, 100%)
    r, g, b = hsv_to_rgb(((hue % 360.0) / 360.0, 1.0, 1.0))
    return ThermometerReading(percent=percent, hue=hue, rgb=(float(r), float(g), float(b)))


def freeze_warning_active(temperature: float, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> bool:
    return temperature <= constants.freezing_point + constants.warning_band


def boil_warning_active(temperature: float, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> bool:
    return temperature >= constants.boiling_point - constants.warning_band


def format_display(
    properties: ThermoProperties,
    constants: PhysicsConstants = DEFAULT_CONSTANTS
) -> DisplayReadout:
    """
    Round the property table for display.

    Rounding happens only here; the simulation always carries full
    precision values.
    """
    temperature = properties.celsius
    return DisplayReadout(
        celsius=f"{properties.celsius:.1f}",
        fahrenheit=f"{properties.fahrenheit:.1f}",
        kelvin=f"{properties.kelvin:.1f}",
        expansion=f"{properties.expansion_percent:.2f}%",
        stress=f"{properties.thermal_stress:.2f} kPa",
        work=f"{properties.work:.0f} J",
        entropy=f"{properties.entropy_change:.4f} J/K",
        freeze_warning=freeze_warning_active(temperature, constants),
        boil_warning=boil_warning_active(temperature, constants)
    )


class PhaseTransitionTracker:
    """
    Track phase regime changes over time.

    Keeps a bounded temperature/phase history and records every
    transition between regimes.
    """

    def __init__(self, history_length: int = 600):
        self.history_length = history_length
        self.temperature_history: List[float] = []
        self.phase_history: List[Phase] = []
        self.time_history: List[float] = []

        self.transition_events: List[Tuple[float, Phase, Phase]] = []

    def update(self, time: float, temperature: float, phase: Phase) -> Optional[Tuple[Phase, Phase]]:
        """
        Record a new sample.

        Returns:
            (old_phase, new_phase) if the regime changed, else None
        """
        previous = self.phase_history[-1] if self.phase_history else None

        self.temperature_history.append(temperature)
        self.phase_history.append(phase)
        self.time_history.append(time)

        if len(self.temperature_history) > self.history_length:
            self.temperature_history.pop(0)
            self.phase_history.pop(0)
            self.time_history.pop(0)

        if previous is not None and previous != phase:
            self.transition_events.append((time, previous, phase))
            return (previous, phase)

        return None

    def get_recent_transitions(self, n: int = 5) -> List[Tuple[float, Phase, Phase]]:
        """Get the n most recent phase transitions."""
        return self.transition_events[-n:]

    def clear(self):
        self.temperature_history = []
        self.phase_history = []
        self.time_history = []
        self.transition_events = []
