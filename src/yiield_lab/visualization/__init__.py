"""Visualization helpers for :mod:`yiield_lab`."""

from .visualizer import Visualizer

__all__ = ["Visualizer"]
