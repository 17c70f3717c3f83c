"""Visualization functions for milankovic."""

from milankovic.visualization.profile import create_profile_plot, create_comparison_plot
from milankovic.visualization.seasonal import create_seasonal_plot

__all__ = [
    "create_profile_plot",
    "create_comparison_plot",
    "create_seasonal_plot",
]
