"""Assemble tables from simulation output stored in directories or archives."""

__version__ = "0.1.0"
