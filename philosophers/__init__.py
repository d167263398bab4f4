"""Dining philosophers simulation: argument parsing, fork locks, philosopher threads and a command-line entry point."""

__version__ = "0.1.0"
__all__ = ["args", "clock", "philosopher", "simulation", "cli"]