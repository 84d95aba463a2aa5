"""
The distviz package provides classes and functions for visualizing pairwise distance matrices.
"""

from .matrix import DistanceMatrix, RawMatrix, read_distance_csv, normalize, load
from .heatmap import Heatmap
from .colorbins import ColorBins
from .charts import FrequencyChart, DECORATIONS
from .utils import make_palette, assign_bins, bin_edges, format_cell_label
from .pipeline import run
