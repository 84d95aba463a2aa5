# computing
from collections import namedtuple
from warnings import warn
import numpy as np
import pandas as pd

# utils
from .utils import _check_df

"""Loading and cleaning of labeled pairwise distance matrices"""


RawMatrix = namedtuple('RawMatrix', 'row_labels col_labels cells')


class DistanceMatrix:
    """
    DistanceMatrix holds a square, labeled numeric matrix of pairwise distances.

    Every cell is coerced to float. Cells that cannot be parsed (blanks, 'NA', stray text)
    are replaced by `fillna` and counted, since downstream plotting needs a complete grid.
    Row and column labels need to describe the same set of samples. If the columns come
    in a different order than the rows they get realigned to the row order.

    Attributes
    ----------
    df : pd.DataFrame
        The cleaned, square DataFrame of floats.
    labels : list
        Sample names, shared by rows and columns.
    n_coerced : int
        Number of cells that were replaced by `fillna`.
    fillna : float
        Value used for missing or non-numeric cells.
    is_symmetric : bool
        Whether the matrix equals its transpose (not required, just reported).

    Methods
    -------
    describe():
        Summary statistics of the off-diagonal distances.
    """

    def __init__(self, data:pd.DataFrame, fillna: float = 0.0, strict: bool = False) -> None:

        _check_df(data)
        self.fillna = float(fillna)
        self._check_shape(data)
        self._check_labels(data)
        data = self._align_columns(data)
        self.n_coerced = 0
        self.df = self._coerce(data, strict)
        self.labels = self.df.index.to_list()
        self.is_symmetric = bool(np.allclose(self.df.values, self.df.values.T))

    def __repr__(self) -> str:
        return (f"DistanceMatrix(Samples: {len(self.labels)}, Symmetric: {self.is_symmetric}, "
                f"Cells filled with {self.fillna}: {self.n_coerced})")

    def _check_shape(self, data):

        nrow, ncol = data.shape
        if nrow != ncol:
            raise ValueError(f"A distance matrix needs to be square, got {nrow} rows and {ncol} columns.")
        if nrow == 0:
            raise ValueError("Got an empty matrix, nothing to do here.")

    def _check_labels(self, data):

        for axis, lbls in (('Row', data.index), ('Column', data.columns)):
            if lbls.has_duplicates:
                dups = lbls[lbls.duplicated()].unique()
                raise ValueError(f"{axis} labels need to be unique, found duplicates: {', '.join(map(str, dups))}")

        only_rows = set(data.index) - set(data.columns)
        only_cols = set(data.columns) - set(data.index)
        if only_rows or only_cols:
            raise ValueError(
                f"Row and column labels do not match. Only in rows: {', '.join(map(str, sorted(only_rows, key=str))) or '-'}, "
                f"only in columns: {', '.join(map(str, sorted(only_cols, key=str))) or '-'}"
            )

    def _align_columns(self, data):

        if data.index.to_list() != data.columns.to_list():
            warn('Column order differs from row order, reordering columns to match rows.', RuntimeWarning)
            return data[data.index.to_list()]
        return data

    def _coerce(self, data, strict: bool):

        numeric = data.apply(pd.to_numeric, errors='coerce').astype(float)
        # infinite distances cannot be binned, treat them like unparsable cells
        numeric = numeric.where(np.isfinite(numeric))
        missing = numeric.isna()
        n_missing = int(missing.values.sum())

        if n_missing > 0:
            where = [f'{r}/{c}' for r, c in zip(*np.nonzero(missing.values))][:5]
            if strict:
                raise ValueError(f"Found {n_missing} missing or non-numeric cells, e.g. at (row/column index) {', '.join(where)}")
            self.n_coerced = n_missing
            warn(f'Found {n_missing} missing or non-numeric cells, replacing them with {self.fillna}.', RuntimeWarning)
            numeric = numeric.fillna(self.fillna)

        return numeric

    @property
    def values(self) -> np.ndarray:
        return self.df.values

    @property
    def shape(self) -> tuple:
        return self.df.shape

    def describe(self) -> pd.Series:
        """Summary statistics (count, mean, std, min, quartiles, max) of all off-diagonal cells."""

        n = len(self.labels)
        off_diagonal = self.df.values[~np.eye(n, dtype=bool)]

        return pd.Series(off_diagonal, name='distance').describe()


def read_distance_csv(path, sep: str = ',') -> RawMatrix:
    """
    Read a delimited matrix whose first row and first column hold labels.

    Cells are returned untouched as strings; blank cells stay empty strings. Nothing
    is validated here, a missing file or a broken CSV raises whatever pandas raises.

    Parameters
    ----------
    path : str or path-like
        Location of the file, e.g. 'Distance_Data.csv'.
    sep : str, optional
        Field delimiter (default is ',').

    Returns
    -------
    RawMatrix
        Named tuple of row labels, column labels and a 2D object array of cell strings.
    """

    df = pd.read_csv(path, sep=sep, index_col=0, dtype=str, keep_default_na=False)

    return RawMatrix(df.index.to_list(), df.columns.to_list(), df.values)


def normalize(raw: RawMatrix, fillna: float = 0.0, strict: bool = False) -> DistanceMatrix:
    """Turn a RawMatrix into a DistanceMatrix, validating labels against the grid dimensions."""

    cells = np.asarray(raw.cells, dtype=object)

    if cells.ndim != 2:
        raise ValueError(f"Cells need to form a 2D grid, got {cells.ndim} dimension(s).")

    nrow, ncol = cells.shape
    if len(raw.row_labels) != nrow or len(raw.col_labels) != ncol:
        raise ValueError(
            f"Labels do not fit the grid: {len(raw.row_labels)} row labels and {len(raw.col_labels)} "
            f"column labels for {nrow} rows and {ncol} columns."
        )

    df = pd.DataFrame(cells, index=pd.Index(raw.row_labels), columns=pd.Index(raw.col_labels))

    return DistanceMatrix(df, fillna=fillna, strict=strict)


def load(path, sep: str = ',', fillna: float = 0.0, strict: bool = False) -> DistanceMatrix:

    return normalize(read_distance_csv(path, sep=sep), fillna=fillna, strict=strict)
