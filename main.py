#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Water Phase Canvas - Command Line Interface
================================================================================

Project:        Water Phase Canvas
Module:         main.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

Command line interface for running the Water Phase Canvas simulation
without the browser: a scripted heat/cool demo, an animated GIF, or the
Streamlit app.
"""

import argparse
import logging
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
import time

from water_canvas.physics import DEFAULT_CONSTANTS
from water_canvas.simulation import create_simulation
from water_canvas.visualization import (
    VisualizationConfig, render_frame_matplotlib, render_temperature_history,
    thermometer_colors
)


def run_heat_cool_demo(heat_seconds: float = 8.0, cool_seconds: float = 12.0, dt: float = 1.0 / 60.0):
    """
    Heat water from ambient to boiling, then cool it until it freezes.

    Args:
        heat_seconds: Simulated seconds with the heater held
        cool_seconds: Simulated seconds with the cooler held
        dt: Integration step (seconds)
    """
    print("=" * 60)
    print("Water Phase Canvas - Heat/Cool Demonstration")
    print("=" * 60)

    sim = create_simulation(temperature=20.0, seed=42)

    times = []
    temperatures = []
    expansions = []
    entropies = []
    particle_counts = []

    schedule = [("heating", heat_seconds), ("cooling", cool_seconds)]

    t_start = time.time()

    for mode, seconds in schedule:
        print(f"\n{mode.capitalize()} for {seconds:.1f} s...")
        sim.set_heating(mode == "heating")
        sim.set_cooling(mode == "cooling")

        n_steps = int(round(seconds / dt))
        for step in range(n_steps):
            frame = sim.step(dt)

            times.append(frame.time)
            temperatures.append(frame.temperature)
            expansions.append(frame.properties.expansion_percent)
            entropies.append(frame.properties.entropy_change)
            particle_counts.append(sim.state.n_particles)

            if frame.transition is not None:
                old, new = frame.transition
                print(f"  t = {frame.time:6.2f} s: {old.value} -> {new.value}")

            if step % 60 == 0:
                d = frame.display
                print(f"  t = {frame.time:6.2f} s: T = {d.celsius:>6} °C, "
                      f"expansion = {d.expansion:>7}, bubbles = {len(sim.state.bubbles):3d}, "
                      f"steam = {len(sim.state.steam):3d}")

    t_end = time.time()
    print(f"\nSimulated {times[-1]:.1f} s in {t_end - t_start:.2f} s of wall time")

    print("\nFinal State:")
    for label, value in frame.display.rows():
        print(f"  {label + ':':<18}{value}")
    if frame.display.freeze_warning:
        print("  ❄ Freeze warning")
    if frame.display.boil_warning:
        print("  ♨ Boil warning")

    # Plot results
    fig, axes = plt.subplots(2, 2, figsize=(12, 9))

    render_temperature_history(times, temperatures, DEFAULT_CONSTANTS, ax=axes[0, 0])
    axes[0, 0].set_title("Temperature vs Time", color="white")

    ax = axes[0, 1]
    ax.scatter(times, expansions, c=thermometer_colors(np.array(temperatures)), s=4)
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Volume Expansion (%)")
    ax.set_title("Thermal Expansion")
    ax.grid(True, alpha=0.3)

    ax = axes[1, 0]
    ax.plot(temperatures, entropies, "b-")
    ax.set_xlabel("T (°C)")
    ax.set_ylabel("ΔS (J/K)")
    ax.set_title("Entropy Change")
    ax.grid(True, alpha=0.3)

    ax = axes[1, 1]
    ax.plot(times, particle_counts, "k-")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Particles")
    ax.set_title("Bubble + Steam Particles")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig("heat_cool_demo.png", dpi=150)
    print("\nPlot saved to heat_cool_demo.png")
    plt.show()


def run_animation(n_frames: int = 300, fps: int = 30):
    """
    Create an animation of the beaker being heated to a boil.

    Args:
        n_frames: Number of animation frames
        fps: Frames per second (also the simulation step rate)
    """
    print("=" * 60)
    print("Water Phase Canvas - Animation")
    print("=" * 60)

    sim = create_simulation(temperature=60.0, seed=7)
    sim.set_heating(True)

    vis_config = VisualizationConfig()
    fig = plt.figure(figsize=vis_config.figsize)
    dt = 1.0 / fps

    def update(frame_idx):
        # Let go of the heater for the last third
        if frame_idx == 2 * n_frames // 3:
            sim.set_heating(False)

        frame = sim.step(dt)
        render_frame_matplotlib(frame, sim.canvas_size, vis_config, sim.constants, fig=fig)
        return fig.axes

    print(f"Creating animation with {n_frames} frames...")
    ani = FuncAnimation(fig, update, frames=n_frames, interval=1000 / fps, blit=False)

    print("Saving animation (this may take a while)...")
    ani.save("water_animation.gif", writer="pillow", fps=fps)
    print("Animation saved to water_animation.gif")

    plt.show()


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Water Phase Canvas - heating and cooling water",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --demo              Run heat/cool demonstration
  python main.py --animate           Create animation
  python main.py --app               Launch Streamlit app
        """
    )

    parser.add_argument('--demo', action='store_true',
                        help='Run heat/cool demonstration')
    parser.add_argument('--animate', action='store_true',
                        help='Create animation')
    parser.add_argument('--app', action='store_true',
                        help='Launch Streamlit web app')
    parser.add_argument('--heat', type=float, default=8.0,
                        help='Seconds of heating in the demo (default: 8)')
    parser.add_argument('--cool', type=float, default=12.0,
                        help='Seconds of cooling in the demo (default: 12)')
    parser.add_argument('--frames', '-f', type=int, default=300,
                        help='Number of animation frames (default: 300)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log phase transitions and clamped frames')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if args.demo:
        run_heat_cool_demo(heat_seconds=args.heat, cool_seconds=args.cool)
    elif args.animate:
        run_animation(n_frames=args.frames)
    elif args.app:
        import subprocess
        print("Launching Streamlit app...")
        subprocess.run(['streamlit', 'run', 'app.py'])
    else:
        parser.print_help()
        print("\nNo action specified. Run with --demo, --animate, or --app")


if __name__ == "__main__":
    main()
