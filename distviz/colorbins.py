# computing
import numpy as np
import pandas as pd

# utils
from .matrix import DistanceMatrix
from .heatmap import Heatmap
from .utils import make_palette, value_range, assign_bins, bin_edges


class ColorBins:

    """Count how many matrix cells end up in each palette color.

    Values are binned exactly like the heatmap colors them: N equal-width bins over the
    observed [min, max] of the matrix, bin i mapped to palette[i]. Use `from_heatmap` to
    guarantee that the palette and value range are shared with a drawn heatmap.

    Attributes:
        palette (tuple): Hex colors, one per bin.
        values (np.ndarray): Flattened matrix values.
        bins (np.ndarray): Bin index of each value.
        counts (pd.Series): Occurrences per color, every palette color present.
    """

    def __init__(self,
                 matrix,
                 palette: tuple = None,
                 n_colors: int = 20,
                 cmap: str = 'viridis',
                 value_lim: tuple = None) -> None:

        if isinstance(matrix, DistanceMatrix):
            values = matrix.values
        elif isinstance(matrix, pd.DataFrame):
            values = DistanceMatrix(matrix).values
        else:
            values = np.asarray(matrix, dtype=float)

        self.palette = tuple(palette) if palette else make_palette(n_colors, cmap)
        self.n_colors = len(self.palette)

        if len(set(self.palette)) != self.n_colors:
            raise ValueError('Palette colors need to be unique to be used as bin labels.')

        self.values = values.ravel()
        self.lo, self.hi = value_lim if value_lim else value_range(self.values)
        self.bins = assign_bins(self.values, self.n_colors, self.lo, self.hi)
        self.counts = pd.Series(np.bincount(self.bins, minlength=self.n_colors),
                                index=pd.Index(self.palette, name='color'),
                                name='count')

    @classmethod
    def from_heatmap(cls, heatmap: Heatmap):
        return cls(heatmap.df.values, palette=heatmap.palette, value_lim=(heatmap.lo, heatmap.hi))

    def __repr__(self) -> str:
        return (f"ColorBins(Values: {len(self.values)}, Colors: {self.n_colors}, "
                f"Occupied bins: {int((self.counts > 0).sum())}, Most frequent: {self.background_color()})")

    @property
    def edges(self) -> np.ndarray:
        return bin_edges(self.lo, self.hi, self.n_colors)

    def color_of(self, value: float) -> str:
        """Palette color a single value is assigned to."""
        return self.palette[int(assign_bins([value], self.n_colors, self.lo, self.hi)[0])]

    def background_color(self) -> str:
        """Color of the most populated bin, usually the one holding the diagonal zeros."""
        return self.counts.idxmax()

    def frequencies(self, exclude=None) -> pd.Series:
        """
        Color counts with some colors left out.

        Parameters
        ----------
        exclude : str, int or list of these, optional
            Colors to drop, given as hex string or bin index. The keyword 'background'
            drops the most frequent color.

        Returns
        -------
        pd.Series
            Counts indexed by color, in palette order.
        """

        if exclude is None:
            return self.counts.copy()

        if isinstance(exclude, (str, int, np.integer, np.bool_)):
            exclude = [exclude]

        drop = []
        for e in exclude:
            if isinstance(e, (bool, np.bool_)):
                raise TypeError(f"Colors to exclude need to be hex strings or bin indices, got: {e!r}")
            if isinstance(e, (int, np.integer)):
                if not 0 <= e < self.n_colors:
                    raise KeyError(f'Bin index {e} out of range for {self.n_colors} colors.')
                drop.append(self.palette[e])
            elif e == 'background':
                drop.append(self.background_color())
            elif e in self.counts.index:
                drop.append(e)
            else:
                raise KeyError(f'Could not find color {e} in palette.')

        return self.counts.drop(list(dict.fromkeys(drop)))
