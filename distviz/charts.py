# computing
import numpy as np
import pandas as pd

# plotting
import matplotlib.pyplot as plt
from matplotlib import colors

# stats
from statsmodels.nonparametric.smoothers_lowess import lowess

# utils
from .colorbins import ColorBins


"""Bar charts derived from the color-frequency aggregation of a heatmap"""


DECORATIONS = ('counts', 'trend', 'max', 'percent', 'mean')


class FrequencyChart:

    """Bar chart of how often each palette color occurs, one bar per color, in palette order.

    All chart variants go through `plot()` and only differ in their decoration:
    'counts' (plain bars), 'trend' (LOWESS curve on top), 'max' (tallest bar annotated),
    'percent' (bars as percent of total, each labeled) and 'mean' (dashed line at the mean count).

    Example:
    cb = ColorBins.from_heatmap(hm)
    fc = FrequencyChart(cb.frequencies(exclude='background'))

    fig, axs = plt.subplots(1, 2, figsize=(8, 3))
    fc.plot('trend', ax=axs[0])
    fc.plot('percent', ax=axs[1], text_kwargs={'fontsize': 4})
    """

    def __init__(self, frequencies) -> None:

        if isinstance(frequencies, ColorBins):
            frequencies = frequencies.frequencies()
        elif isinstance(frequencies, dict):
            frequencies = pd.Series(frequencies, dtype=float)

        if not isinstance(frequencies, pd.Series):
            raise TypeError(f'Need color frequencies as a pandas Series, please. Got: {type(frequencies)}')

        if len(frequencies) == 0:
            raise ValueError('No frequencies left to plot, did you exclude every color?')

        self.freq = frequencies.astype(float)
        self.colors = self.freq.index.to_list()
        self.x = np.arange(len(self.freq))

    def __repr__(self) -> str:
        return (f"FrequencyChart(Colors: {len(self.freq)}, Total: {self.total:g}, "
                f"Mean: {self.mean:.2f}, Max: {self.freq.max():g})")

    @property
    def total(self) -> float:
        return float(self.freq.sum())

    @property
    def mean(self) -> float:
        return float(self.freq.mean())

    def percentages(self) -> pd.Series:

        if self.total == 0:
            raise ValueError('All frequencies are zero, cannot express them as percentages.')

        return self.freq / self.total * 100

    def trend_curve(self, frac: float = 0.5) -> np.ndarray:
        """LOWESS smoothed counts along the palette order. Fewer than three bars are returned as is."""

        n = len(self.freq)
        if n < 3:
            return self.freq.values.copy()

        # lowess needs at least three points per local fit
        frac = min(1.0, max(frac, 3 / n))

        return lowess(self.freq.values, self.x, frac=frac, it=0, return_sorted=False)

    def plot(self,
             decoration: str = 'counts',
             ax=None,
             frac: float = 0.5,
             line_kwargs: dict = None,
             text_kwargs: dict = None,
             **bar_kwargs):

        if decoration not in DECORATIONS:
            raise ValueError(f'Valid decorations are: {", ".join(DECORATIONS)}, got: {decoration}')

        if ax is None:
            ax = plt.gca()

        bar_props = {'color': [c if colors.is_color_like(c) else '0.5' for c in self.colors],
                     'edgecolor': '.15', 'linewidth': 0.3}
        line_props = {'lw': 1, 'color': '.15'}
        text_props = {'fontsize': 'xx-small', 'ha': 'center', 'va': 'bottom'}

        if bar_kwargs:
            for k, v in bar_kwargs.items():
                bar_props.update({k: v})

        if line_kwargs:
            line_props.update(line_kwargs)

        if text_kwargs:
            text_props.update(text_kwargs)

        heights = self.percentages().values if decoration == 'percent' else self.freq.values

        ax.bar(self.x, heights, **bar_props)
        ax.set_xticks(self.x, self.colors, fontsize='xx-small', rotation=90)
        ax.set_xlabel('Color bin', fontsize='small')
        ax.set_ylabel('Percent of cells' if decoration == 'percent' else 'Count', fontsize='small')
        ax.spines[['right', 'top']].set_visible(False)

        if decoration == 'trend':
            ax.plot(self.x, self.trend_curve(frac), **line_props)

        elif decoration == 'max':
            imax = int(np.argmax(heights))
            ax.text(self.x[imax], heights[imax], f'{heights[imax]:g}', **text_props)

        elif decoration == 'percent':
            for xx, h in zip(self.x, heights):
                ax.text(xx, h, f'{h:.1f}%', **text_props)

        elif decoration == 'mean':
            line_props.update({'ls': '--'})
            ax.axhline(self.mean, label=f'Mean: {self.mean:.2f}', **line_props)
            ax.legend(loc=0, frameon=False, fontsize='x-small')

        return ax
