#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Particle System Tests
================================================================================

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
License:        MIT License
================================================================================
"""

import numpy as np
import pytest
from water_canvas.particles import (
    BubbleSystem,
    SteamSystem,
    CircleCommand,
    GradientCommand,
    BUBBLE_LIFE
)

WIDTH = 300.0
HEIGHT = 400.0


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: float):
        self.value = value

    def random(self, size=None):
        if size is None:
            return self.value
        return np.full(size, self.value)


class TestBubbleSpawning:
    """Tests for bubble spawn gating and burst size."""

    def test_no_bubbles_at_threshold(self):
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        for temp in [20.0, 69.9, 70.0]:
            bubbles.step(temp, 0.0, 0.0, WIDTH, HEIGHT)
        assert len(bubbles) == 0

    def test_gate_closed(self):
        """A draw at or above 0.3 means no burst this tick."""
        bubbles = BubbleSystem(rng=FixedRandom(0.3))
        bubbles.step(100.0, 0.0, 0.0, WIDTH, HEIGHT)
        assert len(bubbles) == 0

    def test_burst_at_full_intensity(self):
        """At intensity 1 a burst is two bubbles."""
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        bubbles.step(100.0, 0.0, 0.0, WIDTH, HEIGHT)

        records = bubbles.records()
        assert len(records) == 2
        for bubble in records:
            assert bubble.x == 0.0
            assert bubble.y == HEIGHT
            assert bubble.size == pytest.approx(2.0)
            assert bubble.speed == pytest.approx(1.0)
            assert bubble.life == BUBBLE_LIFE

    def test_small_intensity_spawns_one(self):
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        bubbles.step(71.0, 0.0, 0.0, WIDTH, HEIGHT)
        assert len(bubbles) == 1

    def test_spawn_rate_statistics(self):
        """About 30 % of ticks produce a burst."""
        bubbles = BubbleSystem(rng=np.random.default_rng(0))
        for _ in range(1000):
            bubbles.step(100.0, 0.0, 0.0, WIDTH, HEIGHT)
        assert len(bubbles) % 2 == 0
        assert 480 <= len(bubbles) <= 720

    def test_seeded_runs_match(self):
        a = BubbleSystem(rng=np.random.default_rng(5))
        b = BubbleSystem(rng=np.random.default_rng(5))
        for _ in range(50):
            a.step(90.0, 1 / 60, 0.0, WIDTH, HEIGHT)
            b.step(90.0, 1 / 60, 0.0, WIDTH, HEIGHT)
        assert a.records() == b.records()


class TestBubbleLifecycle:
    """Tests for bubble motion and removal."""

    def test_rises(self):
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        bubbles.step(100.0, 0.0, 0.0, WIDTH, HEIGHT)
        bubbles.step(20.0, 0.5, 0.0, WIDTH, HEIGHT)

        for bubble in bubbles.records():
            assert bubble.y == pytest.approx(HEIGHT - 30.0)
            assert bubble.life == pytest.approx(BUBBLE_LIFE - 30.0)

    def test_removed_when_life_runs_out(self):
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        bubbles.step(100.0, 0.0, 0.0, WIDTH, 10000.0)

        bubbles.step(20.0, 1.5, 0.0, WIDTH, 10000.0)
        assert len(bubbles) == 2
        assert bubbles.records()[0].life == pytest.approx(10.0)

        bubbles.step(20.0, 0.25, 0.0, WIDTH, 10000.0)
        assert len(bubbles) == 0

    def test_removed_above_top(self):
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        bubbles.step(100.0, 0.0, 0.0, WIDTH, 50.0)

        bubbles.step(20.0, 1.0, 0.0, WIDTH, 50.0)
        assert len(bubbles) == 2  # y == -10 is still visible

        bubbles.step(20.0, 0.5, 0.0, WIDTH, 50.0)
        assert len(bubbles) == 0

    def test_no_skipped_or_double_updates(self):
        """Adjacent expirations do not cause survivors to be skipped."""
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        for _ in range(3):
            bubbles.step(100.0, 0.0, 0.0, WIDTH, 10000.0)
        assert len(bubbles) == 6

        bubbles.data["life"] = np.array([10.0, 50.0, 20.0, 50.0, 40.0, 5.0])
        bubbles.step(20.0, 0.5, 0.0, WIDTH, 10000.0)

        lives = [b.life for b in bubbles.records()]
        assert lives == pytest.approx([20.0, 20.0, 10.0])

    def test_draw_commands(self):
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        commands = bubbles.step(100.0, 0.0, 0.0, WIDTH, HEIGHT)

        assert len(commands) == 2
        cmd = commands[0]
        assert isinstance(cmd, CircleCommand)
        assert cmd.radius == pytest.approx(2.0)
        assert cmd.color[3] == pytest.approx(BUBBLE_LIFE / 150.0)

    def test_clear(self):
        bubbles = BubbleSystem(rng=FixedRandom(0.0))
        bubbles.step(100.0, 0.0, 0.0, WIDTH, HEIGHT)
        bubbles.clear()
        assert len(bubbles) == 0


class TestSteamSpawning:
    """Tests for steam spawn gating."""

    def test_no_steam_below_boiling(self):
        steam = SteamSystem(rng=FixedRandom(0.0))
        for temp in [20.0, 99.9, 100.0]:
            steam.step(temp, 0.0, 0.0, WIDTH, HEIGHT)
        assert len(steam) == 0

    def test_single_spawn_per_tick(self):
        steam = SteamSystem(rng=FixedRandom(0.0))
        for tick in range(1, 11):
            steam.step(110.0, 0.0, 0.0, WIDTH, HEIGHT)
            assert len(steam) == tick

    def test_new_particle(self):
        steam = SteamSystem(rng=FixedRandom(0.0))
        steam.step(110.0, 0.0, 0.0, WIDTH, HEIGHT)

        particle = steam.records()[0]
        assert particle.y == HEIGHT
        assert particle.size == pytest.approx(2.5)
        assert particle.speed == pytest.approx(0.5)
        assert particle.sway == 0.0

    def test_generalized_cap(self):
        steam = SteamSystem(rng=FixedRandom(0.0), max_spawn_per_tick=3)
        steam.step(110.0, 0.0, 0.0, WIDTH, HEIGHT)
        assert len(steam) == 3

    def test_invalid_cap(self):
        with pytest.raises(ValueError):
            SteamSystem(max_spawn_per_tick=-1)

    def test_spawn_rate_statistics(self):
        """At 110 degrees each tick spawns with probability 0.25."""
        steam = SteamSystem(rng=np.random.default_rng(0))
        for _ in range(1000):
            steam.step(110.0, 0.0, 0.0, WIDTH, HEIGHT)
        assert 180 <= len(steam) <= 320


class TestSteamLifecycle:
    """Tests for steam motion, decay and removal."""

    def _one_particle(self):
        steam = SteamSystem(rng=FixedRandom(0.0))
        steam.step(120.0, 0.0, 0.0, WIDTH, HEIGHT)
        assert steam.records()[0].size == pytest.approx(5.0)
        return steam

    def test_decay_is_frame_rate_independent(self):
        fine = self._one_particle()
        for _ in range(60):
            fine.step(20.0, 1 / 60, 0.0, WIDTH, HEIGHT)

        coarse = self._one_particle()
        coarse.step(20.0, 1.0, 0.0, WIDTH, HEIGHT)

        expected = 5.0 * 0.98 ** 60
        assert fine.records()[0].size == pytest.approx(expected)
        assert coarse.records()[0].size == pytest.approx(expected)
        assert coarse.records()[0].y == pytest.approx(HEIGHT - 60.0)

    def test_removed_below_visibility_floor(self):
        steam = self._one_particle()
        steam.step(20.0, 2.0, 0.0, WIDTH, HEIGHT)
        assert len(steam) == 0

    def test_no_skipped_or_double_updates(self):
        """Alternating expirations leave every survivor decayed once."""
        steam = SteamSystem(rng=FixedRandom(0.0))
        for _ in range(4):
            steam.step(120.0, 0.0, 0.0, WIDTH, HEIGHT)
        assert len(steam) == 4

        steam.data["size"] = np.array([0.51, 5.0, 0.505, 5.0])
        steam.step(20.0, 1 / 60, 0.0, WIDTH, HEIGHT)

        sizes = [p.size for p in steam.records()]
        assert sizes == pytest.approx([4.9, 4.9])

    def test_draw_commands(self):
        steam = SteamSystem(rng=FixedRandom(0.0))
        commands = steam.step(120.0, 0.0, 0.0, WIDTH, HEIGHT)

        assert len(commands) == 1
        cmd = commands[0]
        assert isinstance(cmd, GradientCommand)
        assert cmd.radius == pytest.approx(5.0)
        assert cmd.inner[3] == pytest.approx(0.1)
        assert cmd.outer[3] == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
