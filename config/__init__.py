"""Simulation and viewer configuration."""
