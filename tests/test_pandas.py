import pandas
import pytest

import kdindex
from kdindex.pandas import FrameTree, from_points


@pytest.fixture
def stations():
    res = pandas.DataFrame({
        'name': ['a', 'b', 'c', 'd', 'e'],
        'x': [0., 10., 0., 10., 5.],
        'y': [0., 0., 10., 10., 5.],
        'z': [0., 1., 2., 3., 50.],
    }, index=[11, 12, 13, 14, 15])
    res.index.name = 'station_id'
    return res


def test_nearest_row(stations):
    ftree = FrameTree(stations)
    row = ftree.nearest_neighbour((4, 4))
    assert isinstance(row, pandas.Series)
    assert row.name == 15
    assert row['name'] == 'e'


def test_radius_rows(stations):
    ftree = FrameTree(stations)
    res = ftree.nearest_neighbours((0, 0), 10.1)
    assert isinstance(res, pandas.DataFrame)
    assert sorted(res.index) == [11, 12, 13, 15]
    assert list(res.columns) == list(stations.columns)


def test_radius_rows_with_distance(stations):
    ftree = FrameTree(stations)
    res = ftree.nearest_neighbours((0, 0), 10.1, include_distance=True)
    assert res.loc[11, 'distance'] == 0.
    assert res.loc[15, 'distance'] == pytest.approx(50**.5)


def test_k_nearest_rows(stations):
    ftree = FrameTree(stations, columns=('x', 'y', 'z'))
    res = ftree.k_nearest_neighbours((0, 0, 0), 3, include_distance=True)
    assert list(res.index) == [11, 12, 13]
    assert list(res['distance']) == pytest.approx(
        [0., 101**.5, 104**.5])


def test_box_rows(stations):
    ftree = FrameTree(stations)
    res = ftree.boxed_range((0, 0), (5, 5))
    assert sorted(res.index) == [11, 15]
    ftree = FrameTree(stations, columns=['x', 'y', 'z'])
    assert list(ftree.boxed_range((0, 0, 0), (5, 5, 10)).index) == [11]


def test_empty_results(stations):
    ftree = FrameTree(stations)
    assert ftree.nearest_neighbours((100, 100), 1.).empty
    assert ftree.boxed_range((20, 20), (30, 30)).empty


def test_frame_errors(stations):
    with pytest.raises(kdindex.NullInputError):
        FrameTree(None)
    with pytest.raises(kdindex.EmptyInputError):
        FrameTree(stations.iloc[:0])
    with pytest.raises(kdindex.InvalidDimensionError):
        FrameTree(stations, columns=['x'])


def test_from_points():
    frame = from_points([(0, 0, 0), (1, 2, 3)])
    ftree = FrameTree(frame, columns=('x', 'y', 'z'))
    assert len(ftree) == 2
    assert ftree.nearest_neighbour((1, 2, 2)).tolist() == [1., 2., 3.]
