import numpy as np
import pandas as pd
import pytest

from distviz import DistanceMatrix, RawMatrix, read_distance_csv, normalize, load


def test_read_keeps_cells_as_strings(distance_csv):
    raw = read_distance_csv(distance_csv)

    assert raw.row_labels == ['A', 'B', 'C']
    assert raw.col_labels == ['A', 'B', 'C']
    assert raw.cells.shape == (3, 3)
    assert raw.cells[0, 2] == 'NA'
    assert raw.cells[1, 2] == '0.5'


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_distance_csv(tmp_path / 'nope.csv')


def test_normalize_replaces_na_with_zero(distance_csv):
    raw = read_distance_csv(distance_csv)

    with pytest.warns(RuntimeWarning, match='1 missing or non-numeric'):
        dm = normalize(raw)

    assert not dm.df.isna().any().any()
    assert dm.df.loc['A', 'C'] == 0.0
    assert dm.df.loc['C', 'A'] == 0.5
    assert dm.n_coerced == 1
    assert dm.labels == ['A', 'B', 'C']


def test_every_non_numeric_cell_becomes_zero():
    cells = np.array([['0', 'abc', ''], ['0.1', '0', 'n/a'], ['0.2', '0.3', '0']], dtype=object)
    raw = RawMatrix(['A', 'B', 'C'], ['A', 'B', 'C'], cells)

    with pytest.warns(RuntimeWarning):
        dm = normalize(raw)

    assert dm.n_coerced == 3
    assert dm.df.loc['A', 'B'] == 0.0
    assert dm.df.loc['A', 'C'] == 0.0
    assert dm.df.loc['B', 'C'] == 0.0
    assert dm.df.loc['C', 'B'] == pytest.approx(0.3)
    assert dm.df.dtypes.eq(float).all()


def test_fillna_is_configurable(distance_csv):
    with pytest.warns(RuntimeWarning):
        dm = load(distance_csv, fillna=1.0)

    assert dm.df.loc['A', 'C'] == 1.0


def test_strict_raises_on_missing(distance_csv):
    with pytest.raises(ValueError, match='missing or non-numeric'):
        load(distance_csv, strict=True)


def test_clean_matrix_does_not_warn(recwarn):
    df = pd.DataFrame([[0, 0.2], [0.2, 0]], index=['x', 'y'], columns=['x', 'y'])
    dm = DistanceMatrix(df)

    assert dm.n_coerced == 0
    assert dm.is_symmetric
    assert len(recwarn) == 0


def test_label_count_mismatch_raises():
    cells = np.zeros((3, 3)).astype(str)
    raw = RawMatrix(['A', 'B'], ['A', 'B', 'C'], cells)

    with pytest.raises(ValueError, match='Labels do not fit the grid'):
        normalize(raw)


def test_non_square_raises():
    df = pd.DataFrame(np.zeros((2, 3)), index=['A', 'B'], columns=['A', 'B', 'C'])

    with pytest.raises(ValueError, match='square'):
        DistanceMatrix(df)


def test_label_sets_must_match():
    df = pd.DataFrame(np.zeros((2, 2)), index=['A', 'B'], columns=['A', 'Z'])

    with pytest.raises(ValueError, match='Row and column labels do not match'):
        DistanceMatrix(df)


def test_duplicate_labels_raise():
    df = pd.DataFrame(np.zeros((2, 2)), index=['A', 'A'], columns=['A', 'A'])

    with pytest.raises(ValueError, match='unique'):
        DistanceMatrix(df)


def test_columns_realigned_to_rows():
    df = pd.DataFrame([[0.5, 0.0], [0.0, 0.5]], index=['A', 'B'], columns=['B', 'A'])

    with pytest.warns(RuntimeWarning, match='reordering'):
        dm = DistanceMatrix(df)

    assert dm.df.columns.to_list() == ['A', 'B']
    assert dm.df.loc['A', 'B'] == 0.5
    assert dm.df.loc['A', 'A'] == 0.0


def test_needs_dataframe():
    with pytest.raises(TypeError):
        DistanceMatrix(np.zeros((2, 2)))


def test_asymmetry_is_reported(distance_csv):
    with pytest.warns(RuntimeWarning):
        dm = load(distance_csv)

    assert not dm.is_symmetric
    assert 'Symmetric: False' in repr(dm)


def test_describe_uses_off_diagonal_cells(distance_csv):
    with pytest.warns(RuntimeWarning):
        dm = load(distance_csv)

    stats = dm.describe()

    assert stats['count'] == 6
    assert stats['max'] == 0.5
    assert stats['min'] == 0.0
    assert stats['mean'] == pytest.approx((0.25 + 0.0 + 0.25 + 0.5 + 0.5 + 0.5) / 6)


def test_infinite_cells_are_filled(tmp_path):
    fp = tmp_path / 'inf.csv'
    fp.write_text(",A,B\nA,0,inf\nB,0.25,-inf\n")

    with pytest.warns(RuntimeWarning, match='2 missing or non-numeric'):
        dm = load(fp)

    assert np.isfinite(dm.values).all()
    assert dm.n_coerced == 2
    assert dm.df.loc['A', 'B'] == 0.0
    assert dm.df.loc['B', 'A'] == 0.25


def test_infinite_cells_raise_when_strict(tmp_path):
    fp = tmp_path / 'inf.csv'
    fp.write_text(",A,B\nA,0,inf\nB,0.25,0\n")

    with pytest.raises(ValueError, match='1 missing or non-numeric'):
        load(fp, strict=True)
