"""Simulators for scheduling, memory management, deadlock avoidance, synchronisation and small card-driven machines."""

__version__ = "0.1.0"