"""Simulation module for running the scanner without venue connectivity."""

from deltahound.simulation.venue import SimulatedPair, SimulatedVenue, build_simulated_venues


__all__ = [
    "SimulatedPair",
    "SimulatedVenue",
    "build_simulated_venues",
]
