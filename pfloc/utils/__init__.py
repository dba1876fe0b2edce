"""
Utility functions for localization algorithms.

This module provides common helpers used across the codebase, mainly
angle operations on unbounded headings.
"""

from .angles import wrap_angle, wrap_angle_array, angle_diff, circular_mean

__all__ = [
    'wrap_angle',
    'wrap_angle_array',
    'angle_diff',
    'circular_mean',
]
