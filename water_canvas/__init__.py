#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
================================================================================
Water Phase Canvas
================================================================================

Project:        Water Phase Canvas
Description:    Real-time simulation of water being heated and cooled, with
                ice, boiling, bubbles, steam and a live property table

Author:         Ryan Kamp
Affiliation:    University of Cincinnati Department of Computer Science
Email:          kamprj@mail.uc.edu
GitHub:         https://github.com/ryanjosephkamp

Created:        October 18, 2026
Last Updated:   October 18, 2026

License:        MIT License
================================================================================

This package implements an interactive water beaker featuring:
- Frame-rate independent temperature integration under heating/cooling
- Ice, liquid and boiling visual regimes with thermal expansion
- Bubble and steam particle systems accelerated with Numba
- Illustrative thermodynamic readouts (expansion, stress, work, entropy)

Modules:
    - physics: Constants, temperature integration and derived properties
    - thermodynamics: Phase regimes, fills, thermometer and display readout
    - particles: Bubble and steam particle systems
    - simulation: Per-frame driver loop
    - visualization: Raster surfaces and Matplotlib rendering
"""

__version__ = "1.0.0"
__author__ = "Ryan Kamp"
