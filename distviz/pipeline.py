# computing
from pathlib import Path

# plotting
from matplotlib.figure import Figure

# utils
from .matrix import load
from .heatmap import Heatmap
from .colorbins import ColorBins
from .charts import FrequencyChart, DECORATIONS

"""Run the whole thing: CSV in, heatmap and frequency charts out"""


FILENAMES = {'heatmap': 'heatmap.png',
             **{d: f'frequency_{d}.png' for d in DECORATIONS}}


def run(path,
        outdir='.',
        n_colors: int = 20,
        cmap: str = 'viridis',
        exclude=None,
        fillna: float = 0.0,
        strict: bool = False,
        cluster: bool = False,
        fontsize='xx-small',
        dpi: int = 150,
        verbose: bool = True) -> dict:
    """
    Load a distance matrix from CSV and write the heatmap plus all frequency chart variants.

    Figures are built with matplotlib's object-oriented Figure, so nothing is registered
    with pyplot and no interactive backend is needed.

    Parameters
    ----------
    path : str or path-like
        CSV file with labels in the first row and column.
    outdir : str or path-like, optional
        Directory for the PNG files, created if missing (default is the working directory).
    n_colors : int, optional
        Palette size, i.e. number of bins shared by heatmap and charts (default is 20).
    cmap : str, optional
        Matplotlib colormap the palette is sampled from (default is 'viridis').
    exclude : str, int or list, optional
        Colors left out of the frequency charts, see ColorBins.frequencies.
    fillna : float, optional
        Replacement for missing or non-numeric cells (default is 0.0).
    strict : bool, optional
        Raise instead of filling missing or non-numeric cells.
    cluster : bool, optional
        Reorder heatmap rows and columns by hierarchical clustering.
    fontsize : str or float, optional
        Font size of heatmap tick labels and cell annotations.
    dpi : int, optional
        Resolution of the written images.
    verbose : bool, optional
        Print progress notes.

    Returns
    -------
    dict
        Figure name ('heatmap', 'counts', 'trend', 'max', 'percent', 'mean') -> written path.
    """

    outdir = Path(outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    if verbose:
        print(f'Loading distance matrix from {path}')

    dm = load(path, fillna=fillna, strict=strict)

    if verbose:
        print(repr(dm))

    hm = Heatmap(dm, n_colors=n_colors, cmap=cmap, cluster=cluster)
    side = max(4, 0.45 * len(dm.labels) + 2)
    fig = Figure(figsize=(side + 1, side))
    ax = fig.subplots()
    hm.plot(ax=ax, fontsize=fontsize)
    hm.add_colorbar(ax=ax)

    written = {'heatmap': _save(fig, outdir / FILENAMES['heatmap'], dpi, verbose)}

    cb = ColorBins.from_heatmap(hm)
    fc = FrequencyChart(cb.frequencies(exclude=exclude))

    for decoration in DECORATIONS:
        fig = Figure(figsize=(6, 4))
        ax = fig.subplots()
        fc.plot(decoration, ax=ax)
        written[decoration] = _save(fig, outdir / FILENAMES[decoration], dpi, verbose)

    return written


def _save(fig: Figure, fp: Path, dpi: int, verbose: bool) -> Path:

    fig.savefig(fp, dpi=dpi, bbox_inches='tight')
    if verbose:
        print(f'Saved {fp}')
    return fp
