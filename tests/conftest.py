import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pytest


# symmetric apart from the missing A/C entry
DISTANCE_CSV = """\
,A,B,C
A,0,0.25,NA
B,0.25,0,0.5
C,0.5,0.5,0
"""


@pytest.fixture
def distance_csv(tmp_path):
    fp = tmp_path / 'Distance_Data.csv'
    fp.write_text(DISTANCE_CSV)
    return fp


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')
