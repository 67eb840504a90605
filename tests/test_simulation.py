#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Simulation Module Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
License:        MIT License
================================================================================
"""

import logging
import numpy as np
import pytest
from water_canvas.physics import DEFAULT_CONSTANTS
from water_canvas.thermodynamics import Phase
from water_canvas.simulation import (
    WaterSimulation, SimulationConfig, SimulationState, Frame,
    create_simulation
)


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestSimulationConfig:
    """Tests for simulation configuration."""

    def test_default_config(self):
        config = SimulationConfig()
        assert config.canvas_size == (300.0, 400.0)
        assert config.initial_temperature == 20.0
        assert config.max_frame_time == 0.1
        assert config.max_steam_per_tick == 1

    def test_invalid_frame_time(self):
        with pytest.raises(ValueError):
            SimulationConfig(max_frame_time=0.0)

    def test_invalid_canvas(self):
        with pytest.raises(ValueError):
            SimulationConfig(canvas_size=(-1.0, 10.0))

    def test_zero_canvas_allowed(self):
        config = SimulationConfig(canvas_size=(0.0, 0.0))
        assert config.canvas_size == (0.0, 0.0)


class TestWaterSimulation:
    """Tests for the driver loop."""

    def test_initial_state(self):
        sim = WaterSimulation()
        state = sim.state
        assert isinstance(state, SimulationState)
        assert state.temperature == 20.0
        assert state.volume == 1.0
        assert not state.is_heating
        assert not state.is_cooling
        assert state.n_particles == 0
        assert sim.frame is None

    def test_initial_temperature_clamped(self):
        sim = WaterSimulation(SimulationConfig(initial_temperature=500.0))
        assert sim.state.temperature == DEFAULT_CONSTANTS.max_temp

    def test_step_returns_frame(self):
        sim = create_simulation(seed=0)
        frame = sim.step(1 / 60)
        assert isinstance(frame, Frame)
        assert frame.step == 1
        assert frame.phase is Phase.NORMAL
        assert frame.display.celsius == "20.0"
        assert sim.frame is frame

    def test_heating_input(self):
        sim = create_simulation(seed=0)
        sim.set_heating(True)
        frame = sim.step(1 / 60)
        assert frame.temperature == pytest.approx(20.35)

    def test_cooling_input(self):
        sim = create_simulation(seed=0)
        sim.set_cooling(True)
        frame = sim.step(1 / 60)
        assert frame.temperature == pytest.approx(19.7)

    def test_release_returns_to_ambient(self):
        sim = create_simulation(seed=0)
        sim.set_heating(True)
        sim.run(60, 1 / 60)
        sim.set_heating(False)
        hot = sim.state.temperature
        frame = sim.run(60, 1 / 60)
        assert frame.temperature < hot

    def test_ambient_fixed_point(self):
        sim = create_simulation(seed=0)
        for _ in range(500):
            sim.step(1 / 60)
        assert sim.state.temperature == 20.0
        assert sim.state.n_particles == 0

    def test_volume_tracks_temperature(self):
        sim = create_simulation(temperature=70.0, seed=0)
        sim.step(0.0)
        assert sim.state.volume == pytest.approx(1.2)

    def test_explicit_step_is_not_clamped(self):
        sim = create_simulation(seed=0, max_frame_time=0.1)
        sim.set_heating(True)
        frame = sim.step(1.0)
        assert frame.elapsed == 1.0
        assert frame.temperature == pytest.approx(41.0)

    def test_run_covers_requested_time(self):
        sim = create_simulation(seed=0)
        frame = sim.run(10, 1.0)
        assert frame.step == 10
        assert frame.time == pytest.approx(10.0)

    def test_negative_step_is_zero(self):
        sim = create_simulation(seed=0)
        sim.set_heating(True)
        frame = sim.step(-1.0)
        assert frame.elapsed == 0.0
        assert frame.temperature == 20.0

    def test_reset(self):
        sim = create_simulation(seed=0)
        sim.set_heating(True)
        sim.run(100, 1 / 60)
        sim.reset(-5.0)
        assert sim.state.temperature == -5.0
        assert sim.state.step == 0
        assert sim.tracker.temperature_history == []


class TestClock:
    """Tests for wall-clock ticking."""

    def test_first_tick_has_zero_elapsed(self):
        clock = FakeClock()
        sim = WaterSimulation(clock=clock)
        frame = sim.tick()
        assert frame.elapsed == 0.0
        assert sim.state.last_update_time == 100.0

    def test_elapsed_from_clock(self):
        clock = FakeClock()
        sim = WaterSimulation(clock=clock)
        sim.set_heating(True)
        sim.tick()
        clock.now += 0.05
        frame = sim.tick()
        assert frame.elapsed == pytest.approx(0.05)
        assert frame.temperature == pytest.approx(20.0 + 0.35 * 3)

    def test_suspended_host_is_clamped(self):
        clock = FakeClock()
        sim = WaterSimulation(clock=clock)
        sim.tick()
        clock.now += 3600.0
        frame = sim.tick()
        assert frame.elapsed == sim.config.max_frame_time
        assert frame.time == pytest.approx(sim.config.max_frame_time)

    def test_clock_going_backwards(self):
        clock = FakeClock()
        sim = WaterSimulation(clock=clock)
        sim.tick()
        clock.now -= 5.0
        frame = sim.tick()
        assert frame.elapsed == 0.0
        assert sim.state.last_update_time == 100.0

    def test_explicit_now(self):
        sim = WaterSimulation()
        sim.tick(now=10.0)
        frame = sim.tick(now=10.02)
        assert frame.elapsed == pytest.approx(0.02)


class TestSurfaces:
    """Tests for surface sizing."""

    def test_resize(self):
        sim = create_simulation(seed=0)
        sim.resize(200, 100)
        assert sim.canvas_size == (200.0, 100.0)
        assert sim.base_height == 100.0

    def test_resize_steam(self):
        sim = create_simulation(seed=0)
        sim.resize_steam(50, 60)
        assert sim.steam_size == (50.0, 60.0)
        assert sim.canvas_size == (300.0, 400.0)

    def test_negative_resize_rejected(self):
        sim = create_simulation(seed=0)
        with pytest.raises(ValueError):
            sim.resize(-1, 10)

    def test_zero_size_surface(self):
        sim = WaterSimulation(SimulationConfig(initial_temperature=110.0, seed=0))
        sim.resize(0, 0)
        sim.resize_steam(0, 0)
        sim.set_heating(True)
        frame = sim.run(30, 1 / 60)
        assert frame.visual.liquid_height == 0.0
        assert frame.temperature > 110.0


class TestEndToEnd:
    """Heating scenarios from ambient to boiling."""

    def test_bubbles_start_after_threshold(self):
        """Bubbles appear only once the temperature passes 70."""
        sim = WaterSimulation(rng=FixedRandom(0.0))
        sim.set_heating(True)

        crossing_tick = None
        for tick in range(1, 11):
            frame = sim.step(1.0)
            if frame.temperature <= DEFAULT_CONSTANTS.bubble_threshold:
                assert len(sim.state.bubbles) == 0
            elif crossing_tick is None:
                crossing_tick = tick
                assert len(sim.state.bubbles) > 0
                assert len(frame.bubble_commands) == len(sim.state.bubbles)

        # 21 degrees per second of heating: 20 -> 41 -> 62 -> 86
        assert crossing_tick == 3

    def test_steam_and_evaporation_while_boiling(self):
        """Steam starts at the boil and the liquid fades toward 120."""
        sim = WaterSimulation(
            SimulationConfig(initial_temperature=100.0),
            rng=FixedRandom(0.0)
        )
        sim.set_heating(True)

        frame = sim.step(1 / 60)
        assert frame.temperature > 100.0

        opacities = [frame.visual.liquid_opacity]
        first_steam = None
        while frame.temperature < DEFAULT_CONSTANTS.max_temp:
            frame = sim.step(1 / 60)
            opacities.append(frame.visual.liquid_opacity)
            if first_steam is None and len(sim.state.steam) > 0:
                first_steam = frame.temperature

        # Puffs smaller than the visibility floor vanish at once, so the
        # first visible steam appears a couple of degrees into the boil
        assert first_steam is not None
        assert 100.0 <= first_steam <= 103.0
        assert all(a > b for a, b in zip(opacities, opacities[1:]))
        assert opacities[-1] == pytest.approx(0.0)
        assert frame.display.boil_warning

    def test_freezing_transition_is_logged(self, caplog):
        sim = create_simulation(temperature=2.0, seed=0)
        sim.set_cooling(True)

        with caplog.at_level(logging.INFO, logger="water_canvas.simulation"):
            frame = sim.run(30, 1 / 60)

        assert frame.phase is Phase.FROZEN
        assert frame.display.freeze_warning
        assert sim.tracker.get_recent_transitions()[-1][1:] == (Phase.NORMAL, Phase.FROZEN)
        assert "normal -> frozen" in caplog.text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
