"""Differentially private facility location: instance generation, private assignment with reconnection, and benchmarks."""

__version__ = "0.1.0"