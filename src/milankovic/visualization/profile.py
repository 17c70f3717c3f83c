"""
Latitude profile plots of banded temperature and ice cover.
"""

from typing import TYPE_CHECKING, Sequence, Union
from pathlib import Path
import logging
import numpy as np
import matplotlib.pyplot as plt

if TYPE_CHECKING:
    from milankovic.core.results import RegionResult

logger = logging.getLogger(__name__)

BACKGROUND = "#050510"
PANEL = "#0a0a15"


def style_axis(ax) -> None:
    """Dark panel styling shared by every figure."""
    ax.set_facecolor(PANEL)
    ax.grid(True, alpha=0.12, color="white", linestyle="-", linewidth=0.4)
    ax.tick_params(colors="white", labelsize=9)
    for spine in ax.spines.values():
        spine.set_color("#333355")
        spine.set_linewidth(0.5)


def _draw_profile(ax, results: "RegionResult", color: str, label: str) -> None:
    fine = np.linspace(-90.0, 90.0, 181)
    ax.plot(fine, results.profile(fine), color=color, lw=1.2, alpha=0.6)
    ax.plot(results.latitudes, results.temperatures, "o", color=color, markersize=7,
            markeredgecolor="white", markeredgewidth=0.8, label=label)
    ax.axhline(results.global_temperature, color=color, linestyle="--", lw=1.0, alpha=0.8)


def create_profile_plot(
    results: "RegionResult",
    filepath: Union[str, Path],
    dpi: int = 150,
    color: str = "#00E5CC",
) -> None:
    """
    Plot band temperatures against latitude with the ice fraction beneath.

    Parameters
    ----------
    results : RegionResult
        Regional evaluation to plot.
    filepath : str or Path
        Output PNG file path.
    dpi : int, optional
        Resolution. Default is 150.
    color : str, optional
        Line colour.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Creating profile plot: {filepath}")

    with plt.style.context("dark_background"):
        fig, (ax1, ax2) = plt.subplots(
            2, 1, figsize=(10, 8), sharex=True, gridspec_kw={"height_ratios": [2, 1], "hspace": 0.08}
        )
        fig.patch.set_facecolor(BACKGROUND)
        style_axis(ax1)
        style_axis(ax2)

        _draw_profile(ax1, results, color, results.name or "Custom")
        ax1.axhline(0.0, color="white", alpha=0.3, linestyle=":", lw=0.8)
        ax1.set_ylabel("Temperature [°C]", color="white")
        ax1.text(
            0.02, 0.95, f"Global mean: {results.global_temperature:.2f} °C",
            transform=ax1.transAxes, color="white", fontsize=10, va="top", family="monospace",
        )

        errors = [b.latitude for b in results.bands if not b.is_valid]
        for lat in errors:
            ax1.axvline(lat, color="#FF4444", alpha=0.6, linestyle=":")

        ax2.bar(results.latitudes, results.ice_factors, width=8.0, color="#A8DADC", alpha=0.85)
        ax2.set_ylim(0.0, 1.05)
        ax2.set_ylabel("Ice fraction", color="white")
        ax2.set_xlabel("Latitude [°N]", color="white")
        ax2.set_xlim(-95.0, 95.0)

        fig.suptitle(results.name or "Custom configuration", color="white", fontsize=15, fontweight="bold")
        fig.savefig(filepath, dpi=dpi, facecolor=BACKGROUND, edgecolor="none", bbox_inches="tight")
        plt.close(fig)

    logger.info(f"Profile plot saved: {filepath}")


def create_comparison_plot(
    results: Sequence["RegionResult"],
    filepath: Union[str, Path],
    colors: Sequence[str] = ("#00E5CC", "#FF6B35", "#FFD700", "#8338EC"),
    dpi: int = 150,
) -> None:
    """Overlay the latitude profiles of several evaluations."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Creating comparison plot: {filepath}")

    with plt.style.context("dark_background"):
        fig, ax = plt.subplots(figsize=(10, 6))
        fig.patch.set_facecolor(BACKGROUND)
        style_axis(ax)

        for i, result in enumerate(results):
            label = f"{result.name or 'Custom'} ({result.global_temperature:.1f} °C)"
            _draw_profile(ax, result, colors[i % len(colors)], label)

        ax.set_xlabel("Latitude [°N]", color="white")
        ax.set_ylabel("Temperature [°C]", color="white")
        ax.set_xlim(-95.0, 95.0)
        ax.legend(loc="lower center", fontsize=9, framealpha=0.3)
        fig.savefig(filepath, dpi=dpi, facecolor=BACKGROUND, edgecolor="none", bbox_inches="tight")
        plt.close(fig)

    logger.info(f"Comparison plot saved: {filepath}")
