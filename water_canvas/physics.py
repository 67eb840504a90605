#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Water Heating Physics Engine
================================================================================

Project:        Water Phase Canvas
Module:         physics.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

This module holds the physical constants of the water beaker together with
the temperature integrator and the derived thermodynamic quantities.

All rates are expressed "per nominal frame" of a 60 Hz display. Elapsed time
is measured in seconds and converted with:
    frames = elapsed_seconds * 60

so the integration is independent of the actual frame rate.

The derived quantities are illustrative, not rigorous:
    expansion  = ΔT · β · 100                  (%)
    stress     = α · E · ΔT / 1000             (kPa)
    work       = V · c · ΔT                    (J)
    entropy    = ln((T + 273.15) / 293.15)     (J/K)

where ΔT is measured from the 20° ambient reference.
"""

import numpy as np
from numba import jit
from dataclasses import dataclass

KELVIN_OFFSET = 273.15


@dataclass(frozen=True)
class PhysicsConstants:
    """
    Fixed physical constants of the simulation.

    Temperatures are on a Celsius-like scale. Rates are degrees per
    nominal frame (see ``nominal_fps``).
    """
    boiling_point: float = 100.0
    freezing_point: float = 0.0
    max_temp: float = 120.0
    min_temp: float = -10.0
    ambient_temperature: float = 20.0

    expansion_rate: float = 0.004     # Volumetric expansion per degree
    bubble_threshold: float = 70.0    # Bubbles form above this

    heat_rate: float = 0.35
    cool_rate: float = 0.3
    ambient_cooling: float = 0.05     # Passive drift toward ambient
    boil_acceleration: float = 0.05   # Extra heating above bubble threshold
    freeze_acceleration: float = 0.05 # Extra cooling near freezing
    freeze_acceleration_band: float = 10.0
    ambient_deadband: float = 0.5

    material_constant: float = 1.2e-5  # Thermal expansion coefficient
    elasticity: float = 2e9            # Young's modulus (Pa)
    specific_heat: float = 4186.0      # J/kg°C for water

    warning_band: float = 5.0
    nominal_fps: float = 60.0

    @property
    def temperature_range(self) -> float:
        """Span of the clamped temperature interval."""
        return self.max_temp - self.min_temp


DEFAULT_CONSTANTS = PhysicsConstants()


@dataclass
class ThermoProperties:
    """Derived quantities shown in the property table (full precision)."""
    celsius: float
    fahrenheit: float
    kelvin: float
    expansion_percent: float
    thermal_stress: float   # kPa
    work: float             # J
    entropy_change: float   # J/K


@jit(nopython=True, cache=True)
def integrate_temperature(
    temperature: float,
    heating: bool,
    cooling: bool,
    frames: float,
    heat_rate: float,
    cool_rate: float,
    ambient_cooling: float,
    ambient: float,
    deadband: float,
    bubble_threshold: float,
    boil_acceleration: float,
    freezing_point: float,
    freeze_band: float,
    freeze_acceleration: float,
    min_temp: float,
    max_temp: float
) -> float:
    """
    Advance temperature by ``frames`` nominal frames.

    Heating wins over cooling when both are set. With neither set the
    temperature relaxes toward ambient without crossing it.

    Returns:
        New temperature clamped to [min_temp, max_temp]
    """
    if frames < 0.0:
        frames = 0.0

    if heating:
        temperature += heat_rate * frames
        if temperature > bubble_threshold:
            temperature += boil_acceleration * frames
    elif cooling:
        temperature -= cool_rate * frames
        if temperature < freezing_point + freeze_band:
            temperature -= freeze_acceleration * frames
    else:
        diff = temperature - ambient
        if abs(diff) > deadband:
            drift = min(ambient_cooling * frames, abs(diff))
            if diff > 0.0:
                temperature -= drift
            else:
                temperature += drift

    if temperature < min_temp:
        temperature = min_temp
    elif temperature > max_temp:
        temperature = max_temp

    return temperature


def advance_temperature(state, elapsed_seconds: float, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> float:
    """
    Advance ``state.temperature`` by one tick of ``elapsed_seconds``.

    Args:
        state: Object with ``temperature``, ``is_heating`` and ``is_cooling``
        elapsed_seconds: Wall-clock time since the previous tick
        constants: Physical constants

    Returns:
        The updated temperature (also stored on ``state``)
    """
    c = constants
    state.temperature = float(integrate_temperature(
        float(state.temperature),
        bool(state.is_heating),
        bool(state.is_cooling),
        float(elapsed_seconds) * c.nominal_fps,
        c.heat_rate,
        c.cool_rate,
        c.ambient_cooling,
        c.ambient_temperature,
        c.ambient_deadband,
        c.bubble_threshold,
        c.boil_acceleration,
        c.freezing_point,
        c.freeze_acceleration_band,
        c.freeze_acceleration,
        c.min_temp,
        c.max_temp
    ))
    return state.temperature


def expansion_factor(temperature: float, constants: PhysicsConstants = DEFAULT_CONSTANTS) -> float:
    """Relative volume 1 + ΔT·β; also the simulated volume."""
    return 1.0 + (temperature - constants.ambient_temperature) * constants.expansion_rate


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9.0 / 5.0 + 32.0


def celsius_to_kelvin(celsius: float) -> float:
    return celsius + KELVIN_OFFSET


def calculate_properties(
    temperature: float,
    volume: float,
    constants: PhysicsConstants = DEFAULT_CONSTANTS
) -> ThermoProperties:
    """
    Compute the property table for a temperature and volume.

    Args:
        temperature: Current temperature
        volume: Current (relative) volume
        constants: Physical constants

    Returns:
        ThermoProperties at full precision
    """
    c = constants
    delta_t = temperature - c.ambient_temperature
    reference_kelvin = celsius_to_kelvin(c.ambient_temperature)

    return ThermoProperties(
        celsius=temperature,
        fahrenheit=celsius_to_fahrenheit(temperature),
        kelvin=celsius_to_kelvin(temperature),
        expansion_percent=delta_t * c.expansion_rate * 100.0,
        thermal_stress=c.material_constant * c.elasticity * delta_t / 1000.0,
        work=volume * c.specific_heat * delta_t,
        entropy_change=float(np.log(celsius_to_kelvin(temperature) / reference_kelvin))
    )
