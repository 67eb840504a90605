#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Water Phase Canvas - Interactive Streamlit Application
================================================================================

Project:        Water Phase Canvas
Module:         app.py

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

This is the main Streamlit application for the Water Phase Canvas.
Users can:
- Hold the heater or the cooler on a beaker of water
- Watch it freeze, bubble, boil and steam in real time
- Read the live property table and freeze/boil warnings
"""

import streamlit as st
import matplotlib.pyplot as plt
import time

from water_canvas.simulation import WaterSimulation, SimulationConfig
from water_canvas.visualization import (
    VisualizationConfig, render_frame_streamlit, render_temperature_history,
    phase_color
)


# Page configuration
st.set_page_config(
    page_title="Water Phase Canvas",
    page_icon="💧",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
.stApp {
    background-color: #0e1117;
}
.phase-indicator {
    font-size: 24px;
    font-weight: bold;
    padding: 10px;
    border-radius: 8px;
    text-align: center;
    margin: 5px 0;
    color: white;
}
</style>
""", unsafe_allow_html=True)

CONTROL_MODES = ["⏸️ Idle", "🔥 Heat", "❄️ Cool"]


def initialize_session_state():
    """Initialize Streamlit session state variables."""
    if 'simulation' not in st.session_state:
        st.session_state.simulation = WaterSimulation(SimulationConfig())
    if 'running' not in st.session_state:
        st.session_state.running = False
    if 'vis_config' not in st.session_state:
        st.session_state.vis_config = VisualizationConfig()
    if 'control_mode' not in st.session_state:
        st.session_state.control_mode = CONTROL_MODES[0]


def render_sidebar():
    """Render the sidebar with controls."""
    st.sidebar.title("💧 Water Phase Canvas")

    st.sidebar.markdown("""
    ---
    Hold the **heater** to bring the water to a boil, or the **cooler**
    to freeze it. Let go and it drifts back to room temperature (20 °C).

    - ❄️ **Frozen**: at or below 0 °C
    - 💧 **Liquid**: expands as it warms
    - 🫧 **Bubbles**: above 70 °C
    - ♨️ **Steam**: at or above 100 °C

    ---
    """)

    st.session_state.control_mode = st.sidebar.radio(
        "Control",
        CONTROL_MODES,
        index=CONTROL_MODES.index(st.session_state.control_mode),
        help="Streamlit has no press-and-hold, so pick the active control"
    )

    sim = st.session_state.simulation
    sim.set_heating(st.session_state.control_mode == CONTROL_MODES[1])
    sim.set_cooling(st.session_state.control_mode == CONTROL_MODES[2])

    start_temp = st.sidebar.slider(
        "Reset Temperature (°C)",
        min_value=float(sim.constants.min_temp),
        max_value=float(sim.constants.max_temp),
        value=20.0, step=1.0
    )

    if st.sidebar.button("🔄 Reset", use_container_width=True):
        sim.reset(start_temp)
        st.rerun()

    st.sidebar.markdown("---")
    st.session_state.vis_config.show_thermometer = st.sidebar.checkbox(
        "Show Thermometer", value=True
    )

    st.sidebar.markdown("""
    ---
    ### 👤 Author
    **Ryan Kamp**
    University of Cincinnati
    Department of Computer Science
    📧 kamprj@mail.uc.edu
    🔗 [GitHub](https://github.com/ryanjosephkamp)
    """)


def render_main_content():
    """Render the beaker, property table and history."""
    sim = st.session_state.simulation

    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("Beaker")

        btn_col1, btn_col2, btn_col3 = st.columns(3)
        with btn_col1:
            run_label = "▶️ Run" if not st.session_state.running else "⏸️ Pause"
            if st.button(run_label, use_container_width=True, key="run_pause_btn"):
                st.session_state.running = not st.session_state.running
                # Do not integrate the time spent paused
                sim.state.last_update_time = None
                st.rerun()
        with btn_col2:
            if st.button("⏭️ Step (1 s)", use_container_width=True):
                sim.run(60, 1.0 / 60.0)
        with btn_col3:
            st.metric("Ticks", sim.state.step)

        if st.session_state.running:
            frame = sim.tick()
        else:
            frame = sim.frame if sim.frame is not None else sim.step(0.0)

        img_bytes = render_frame_streamlit(
            frame, sim.canvas_size, st.session_state.vis_config, sim.constants
        )
        st.image(img_bytes, use_container_width=True)

    with col2:
        st.subheader("Properties")

        st.markdown(
            f'<div class="phase-indicator" style="background-color: {phase_color(frame.phase.value)}">'
            f'{frame.phase.value.upper()}</div>',
            unsafe_allow_html=True
        )

        display = frame.display
        if display.freeze_warning:
            st.warning("❄️ Approaching freezing point")
        if display.boil_warning:
            st.warning("♨️ Approaching boiling point")

        st.table({
            "Property": [label for label, _ in display.rows()],
            "Value": [value for _, value in display.rows()],
        })

        st.metric("Bubbles", len(sim.state.bubbles))
        st.metric("Steam Particles", len(sim.state.steam))

        tracker = sim.tracker
        if len(tracker.temperature_history) > 1:
            st.markdown("### Temperature History")
            fig = render_temperature_history(
                tracker.time_history, tracker.temperature_history, sim.constants
            )
            plt.tight_layout()
            st.pyplot(fig)
            plt.close(fig)

        transitions = tracker.get_recent_transitions()
        if transitions:
            st.markdown("### Recent Transitions")
            for t, old, new in reversed(transitions):
                st.markdown(f"- t = {t:.1f} s: {old.value} → {new.value}")

    # Auto-refresh when running
    if st.session_state.running:
        time.sleep(0.03)
        st.rerun()


def main():
    """Main application entry point."""
    initialize_session_state()
    render_sidebar()
    render_main_content()


if __name__ == "__main__":
    main()
