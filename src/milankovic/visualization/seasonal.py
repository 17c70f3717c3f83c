"""
Seasonal cycle figure: band temperature heatmap and the global-mean curve.
"""

from typing import TYPE_CHECKING, Union
from pathlib import Path
import logging
import numpy as np
import matplotlib.pyplot as plt

from milankovic.visualization.profile import BACKGROUND, style_axis

if TYPE_CHECKING:
    from milankovic.core.results import SeasonalCycleResults

logger = logging.getLogger(__name__)


def create_seasonal_plot(
    results: "SeasonalCycleResults",
    filepath: Union[str, Path],
    dpi: int = 150,
) -> None:
    """
    Plot the seasonal cycle.

    Top panel: temperature of each band (rows, north at the top) against
    season. Bottom panel: global mean with the annual mean marked.

    Parameters
    ----------
    results : SeasonalCycleResults
        Seasonal cycle to plot.
    filepath : str or Path
        Output PNG file path.
    dpi : int, optional
        Resolution. Default is 150.
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    logger.info(f"Creating seasonal plot: {filepath}")

    with plt.style.context("dark_background"):
        fig, (ax1, ax2) = plt.subplots(
            2, 1, figsize=(11, 8), sharex=True, gridspec_kw={"height_ratios": [2, 1], "hspace": 0.1}
        )
        fig.patch.set_facecolor(BACKGROUND)
        style_axis(ax1)
        style_axis(ax2)

        limit = float(np.nanmax(np.abs(results.temperature))) or 1.0
        step = 1.0 / results.n_seasons
        mesh = ax1.imshow(
            results.temperature.T,
            aspect="auto",
            cmap="RdBu_r",
            vmin=-limit,
            vmax=limit,
            extent=(0.0, results.n_seasons * step, len(results.latitude) - 0.5, -0.5),
            interpolation="nearest",
        )
        ax1.set_yticks(np.arange(len(results.latitude)))
        ax1.set_yticklabels([f"{lat:+.0f}°" for lat in results.latitude])
        ax1.set_ylabel("Band", color="white")
        cbar = fig.colorbar(mesh, ax=[ax1, ax2], fraction=0.03, pad=0.02)
        cbar.set_label("Temperature [°C]", color="white")

        ax2.plot(results.season, results.global_temperature, color="#00E5CC", lw=2.0)
        ax2.axhline(results.annual_mean, color="white", alpha=0.5, linestyle="--", lw=1.0)
        ax2.set_xlim(0.0, 1.0)
        ax2.set_xlabel("Season (fraction of year)", color="white")
        ax2.set_ylabel("Global mean [°C]", color="white")

        fig.suptitle(
            f"{results.name or 'Custom configuration'}: seasonal cycle",
            color="white", fontsize=15, fontweight="bold",
        )
        fig.savefig(filepath, dpi=dpi, facecolor=BACKGROUND, edgecolor="none", bbox_inches="tight")
        plt.close(fig)

    logger.info(f"Seasonal plot saved: {filepath}")
