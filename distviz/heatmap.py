# computing
import numpy as np
import pandas as pd

# plotting
import matplotlib.pyplot as plt
from matplotlib import colors

# stats
from scipy.spatial import distance
from scipy.cluster import hierarchy

# utils
from .matrix import DistanceMatrix
from .utils import make_palette, value_range, assign_bins, bin_edges, format_cell_label, _color_light_or_dark


"""This module implements the annotated distance heatmap"""


class Heatmap:

    """Class to hold a distance matrix for heatmap plotting via matplotlib's pcolormesh.

    Every cell is colored by the palette color of its bin, using the same equal-width
    binning over the observed value range that ColorBins uses. Cells are annotated with
    the distance as a percentage. Rows and columns keep the input order unless
    `cluster` is set, in which case average linkage clustering on the distances
    determines the order.

    Example:
    dm = load('Distance_Data.csv')
    hm = Heatmap(dm, n_colors=20)

    fig, ax = plt.subplots(figsize=(8, 7))
    hm.plot(ax=ax, fontsize=6)
    hm.add_colorbar()
    """

    def __init__(self,
                 matrix: DistanceMatrix,
                 palette: tuple = None,
                 n_colors: int = 20,
                 cmap: str = 'viridis',
                 cluster: bool = False) -> None:

        if isinstance(matrix, pd.DataFrame):
            matrix = DistanceMatrix(matrix)

        if not isinstance(matrix, DistanceMatrix):
            raise TypeError(f'Need a DistanceMatrix or a pandas DataFrame, please. Got: {type(matrix)}')

        self.matrix = matrix
        self.palette = tuple(palette) if palette else make_palette(n_colors, cmap)
        self.n_colors = len(self.palette)
        self.cluster = cluster
        self.df = self._cluster(matrix.df) if cluster else matrix.df
        self.lo, self.hi = value_range(self.df.values)
        self.bins = assign_bins(self.df.values, self.n_colors, self.lo, self.hi)
        self.cell_labels = self.df.apply(lambda col: col.map(format_cell_label))
        self.x, self.y = [arr.ravel() for arr in np.meshgrid(np.arange(self.df.shape[1]), np.arange(self.df.shape[0]))]
        self.mesh = None

    def __repr__(self) -> str:
        return (f"Heatmap(Samples: {len(self.df)}, Colors: {self.n_colors}, "
                f"Range: {self.lo:.4f}-{self.hi:.4f}, Clustered: {self.cluster})")

    def _cluster(self, df: pd.DataFrame):

        if len(df) < 3:
            print('Fewer than three samples, skipping clustering.')
            return df

        condensed = distance.squareform(df.values, checks=False)
        linkage = hierarchy.linkage(condensed, method='average')
        order = hierarchy.dendrogram(linkage, labels=df.index, no_plot=True)['leaves']

        return df.iloc[order, order]

    def cell_color(self, row, col) -> str:
        """Palette color of the cell at the given row and column labels."""

        i, j = self.df.index.get_loc(row), self.df.columns.get_loc(col)
        return self.palette[self.bins[i, j]]

    @property
    def edges(self) -> np.ndarray:
        return bin_edges(self.lo, self.hi, self.n_colors)

    def plot(self, ax=None, annotate: bool = True, fontsize='xx-small', mesh_kwargs: dict = None, **text_kwargs):

        if ax is None:
            ax = plt.gca()

        mesh_props = {'edgecolors': 'w', 'linewidth': 0.5}

        if mesh_kwargs:
            for k, v in mesh_kwargs.items():
                mesh_props.update({k: v})

        cmap = colors.ListedColormap(self.palette)
        norm = colors.BoundaryNorm(np.arange(self.n_colors + 1) - 0.5, self.n_colors)

        nrow, ncol = self.bins.shape
        self.mesh = ax.pcolormesh(self.bins, cmap=cmap, norm=norm, **mesh_props)
        ax.set_xticks(np.arange(ncol) + 0.5, self.df.columns, fontsize=fontsize, rotation=90)
        ax.set_yticks(np.arange(nrow) + 0.5, self.df.index, fontsize=fontsize)
        ax.set_xlim(0, ncol)
        ax.set_ylim(nrow, 0)  # first row on top
        ax.set_aspect('equal')
        ax.tick_params(length=0)

        if annotate:
            self.annotate(ax=ax, fontsize=fontsize, **text_kwargs)

        return self.mesh

    def annotate(self, ax=None, fontsize='xx-small', **text_kwargs):

        if ax is None:
            ax = plt.gca()

        text_props = {"fontsize": fontsize, "ha": 'center', 'va': 'center'}

        if text_kwargs:
            for k, v in text_kwargs.items():
                text_props.update({k: v})

        labels = self.cell_labels.values.ravel()
        bins = self.bins.ravel()

        for xx, yy, lbl, b in zip(self.x, self.y, labels, bins):
            color = _color_light_or_dark(np.array(colors.to_rgba(self.palette[b])))
            ax.text(xx + 0.5, yy + 0.5, lbl, color=color, **text_props)

        return ax

    def add_colorbar(self, ax=None, nticks: int = 5, label: str = 'Distance', **colorbar_kwargs):
        """Colorbar with one segment per palette color, ticks placed on bin edges."""

        if self.mesh is None:
            raise AttributeError('Nothing drawn yet, please call plot() first.')

        if ax is None:
            ax = self.mesh.axes

        step = max(1, self.n_colors // nticks)
        tick_idx = np.arange(0, self.n_colors + 1, step)
        cbar = ax.figure.colorbar(self.mesh, ax=ax, **colorbar_kwargs)
        cbar.set_ticks(tick_idx - 0.5, labels=[format_cell_label(e) for e in self.edges[tick_idx]])
        cbar.ax.tick_params(labelsize='x-small')
        cbar.set_label(label, fontsize='small')

        return cbar
