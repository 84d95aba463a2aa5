import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

# matplotlib imports
from matplotlib import colors

"""Functions used by most other modules: palette, binning and label formatting"""


def make_palette(n_colors: int = 20, cmap: str = "viridis") -> tuple:
    """Sample `n_colors` evenly spaced colors from a matplotlib colormap.

    The palette is the single source of truth for heatmap colors and for the
    color-frequency aggregation, so both need to receive the same tuple.

    Args:
        n_colors (int): Number of colors, i.e. number of bins. Default is 20.
        cmap (str): Name of a registered matplotlib colormap.

    Returns:
        tuple: Hex color strings, lowest bin first.
    """

    if n_colors < 1:
        raise ValueError(f"Need at least one color for a palette, got: {n_colors}")

    ccolors = plt.get_cmap(cmap)(np.linspace(0, 1, n_colors))

    return tuple(colors.to_hex(c) for c in ccolors)


def value_range(values) -> tuple:
    """Observed (min, max) of all values."""

    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise ValueError("Cannot determine a value range from an empty array.")

    return float(np.min(arr)), float(np.max(arr))


def assign_bins(values, n_bins: int, lo: float = None, hi: float = None) -> np.ndarray:
    """Assign every value to one of `n_bins` equal-width bins over [lo, hi].

    The bin of a value v is floor((v - lo) / (hi - lo) * n_bins), clamped to
    [0, n_bins - 1], so the maximum lands in the last bin. If lo and hi are not
    provided, the observed range of `values` is used. A degenerate range
    (hi == lo) puts everything into bin 0. The output keeps the input's shape.
    """

    arr = np.asarray(values, dtype=float)

    if n_bins < 1:
        raise ValueError(f"Number of bins needs to be positive, got: {n_bins}")

    if not np.isfinite(arr).all():
        raise ValueError("Found NaN or infinite values, please fill them before binning.")

    if arr.size == 0:
        return arr.astype(int)

    obs_lo, obs_hi = value_range(arr)
    lo = obs_lo if lo is None else lo
    hi = obs_hi if hi is None else hi

    if hi < lo:
        raise ValueError(f"Upper bound ({hi}) is smaller than lower bound ({lo}).")

    if hi == lo:
        return np.zeros(arr.shape, dtype=int)

    idx = np.floor((arr - lo) / (hi - lo) * n_bins).astype(int)

    return np.clip(idx, 0, n_bins - 1)


def bin_edges(lo: float, hi: float, n_bins: int) -> np.ndarray:
    return np.linspace(lo, hi, n_bins + 1)


def format_cell_label(value: float) -> str:
    """Percentage label for a distance, e.g. 0.1234 -> '12.34%'."""

    # adding 0.0 turns -0.0 into 0.0
    return f"{round(value * 100, 2) + 0.0:.2f}%"


def _check_df(data):
    if not isinstance(data, pd.DataFrame):
        raise TypeError(f"Data needs to be supplied as a pandas DataFrame, got: {type(data)}")


def _color_light_or_dark(rgba_in: np.ndarray) -> str:
    """[For plotting purposes, we determine whether a color is light or dark and adjust its text color accordingly.
    Also see https://stackoverflow.com/questions/22603510/is-this-possible-to-detect-a-colour-is-a-light-or-dark-colour]

    Args:
        rgba_in ([np.ndarray]): [A numpy array containing RGBA as returned by matplotlib colormaps]

    Returns:
        [str]: [A string: w for white or k for black]
    """
    r, g, b, _ = rgba_in * 255
    hsp = np.sqrt(0.299 * (r * r) + 0.587 * (g * g) + 0.114 * (b * b))
    if hsp > 127.5:
        # light color, return black for text
        return 'k'
    else:
        # dark color, return white for text
        return 'w'
