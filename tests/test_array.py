import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ndtensor import (
    IndexOutOfBounds,
    InvalidArgument,
    InvalidRange,
    InvalidShape,
    NDArray,
    ShapeMismatch,
    arange,
    array_from_range,
    create_array,
    full,
    ones,
    repeat,
    zeros,
)


def test_get_and_set_by_multi_index():
    a = NDArray([1, 2, 3, 4, 5, 6, 7, 8], [2, 2, 2])
    assert a.get([1, 1, 0]) == 7
    a.set([1, 1, 0], -1)
    assert a.get([1, 1, 0]) == -1
    assert a.data == [1, 2, 3, 4, 5, 6, -1, 8]


def test_row_major_layout():
    b = NDArray([1, 2, 3, 4, 5, 6], [2, 3])
    assert [b.get([0, j]) for j in range(3)] == [1, 2, 3]
    assert [b.get([1, j]) for j in range(3)] == [4, 5, 6]


def test_size_and_strides_are_derived():
    a = zeros([2, 3, 4, 5])
    assert a.size == 120
    assert a.ndim == 4
    assert a.strides == (60, 20, 5, 1)


def test_scalar_shorthand_indexes_the_flat_buffer():
    a = NDArray([4, 5, 6], [3])
    assert a.get(1) == 5
    assert NDArray([9], [1]).get() == 9
    m = NDArray([1, 2, 3, 4], [2, 2])
    assert m.get(3) == 4
    with pytest.raises(IndexOutOfBounds):
        m.get(4)


def test_update_applies_function_in_place():
    a = NDArray([1, 2, 3], [3])
    a.update([2], lambda value: value * 10)
    assert a.data == [1, 2, 30]


def test_out_of_bounds_access_raises():
    a = NDArray([1, 2, 3, 4], [2, 2])
    with pytest.raises(IndexOutOfBounds):
        a.get([2, 0])
    with pytest.raises(IndexOutOfBounds):
        a.get([0, -1])
    with pytest.raises(IndexOutOfBounds):
        a.set([0], 1)
    with pytest.raises(IndexOutOfBounds):
        a.get(-1)
    assert a.data == [1, 2, 3, 4]


def test_construction_validates_buffer_and_shape():
    with pytest.raises(ShapeMismatch):
        NDArray([1, 2, 3], [2, 2])
    with pytest.raises(InvalidShape):
        NDArray([], [-1, 2])
    with pytest.raises(InvalidArgument):
        NDArray(["a"], [1])
    with pytest.raises(InvalidArgument):
        NDArray([True], [1])


def test_empty_shapes_hold_empty_buffers():
    assert NDArray([], []).size == 0
    assert NDArray([], [3, 0]).size == 0
    with pytest.raises(ShapeMismatch):
        NDArray([1], [])


def test_set_rejects_non_numbers():
    a = zeros([2])
    with pytest.raises(InvalidArgument):
        a.set([0], "x")
    assert a.data == [0, 0]


def test_tolist_and_item():
    a = NDArray([1, 2, 3, 4, 5, 6], [2, 3])
    assert a.tolist() == [[1, 2, 3], [4, 5, 6]]
    assert NDArray([7], [1]).item() == 7
    with pytest.raises(InvalidArgument):
        a.item()


def test_copy_owns_its_buffer():
    a = NDArray([1, 2], [2])
    b = a.copy()
    b.set([0], 9)
    assert a.get([0]) == 1
    assert not a.array_equal(b)


def test_full_zeros_ones():
    a = repeat(2, [3, 3])
    assert a.get([1, 0]) == 2
    assert a.get([2, 2]) == 2
    assert full(2, 7.5).data == [7.5, 7.5]
    assert zeros([3, 3]).get([2, 2]) == 0
    assert ones([2]).data == [1, 1]
    with pytest.raises(InvalidShape):
        zeros([-1, -1])
    with pytest.raises(InvalidArgument):
        full([2], "x")


def test_create_array_infers_shape():
    a = create_array([[1, 2, 3], [4, 5, 6]])
    assert a.shape == (2, 3)
    assert a.get([1, 1]) == 5
    assert create_array(3).shape == (1,)
    assert create_array([]).shape == (0,)


def test_create_array_rejects_ragged_and_non_numeric():
    with pytest.raises(InvalidArgument, match="Irregular"):
        create_array([[1, 2, 3], [4, 5, 6, 7]])
    with pytest.raises(InvalidArgument):
        create_array([[1, 2], 3])
    with pytest.raises(InvalidArgument):
        create_array([1, "2"])
    with pytest.raises(InvalidArgument):
        create_array("12")


def test_arange():
    assert arange(4) == [0, 1, 2, 3]
    assert arange(1, 7, 2) == [1, 3, 5]
    assert arange(3, 0, -1) == [3, 2, 1]
    assert arange(2, 2) == []
    with pytest.raises(InvalidRange):
        arange(0, 3, 0)
    with pytest.raises(InvalidArgument):
        arange(0, float("inf"))


def test_array_from_range():
    a = array_from_range(1, 7, shape=[2, 3])
    assert a.tolist() == [[1, 2, 3], [4, 5, 6]]
    assert array_from_range(3).shape == (3,)


def test_repr_mentions_shape():
    assert repr(NDArray([1, 2], [2])) == "NDArray([1, 2], shape=(2,))"


@given(
    st.lists(st.integers(min_value=1, max_value=4), min_size=1, max_size=3),
    st.data(),
)
@settings(max_examples=40)
def test_set_then_get_leaves_other_cells_alone(shape, data):
    """Property: set only touches the addressed cell."""
    size = 1
    for dim in shape:
        size *= dim
    a = NDArray(list(range(size)), shape)
    index = [data.draw(st.integers(min_value=0, max_value=dim - 1)) for dim in shape]
    a.set(index, -5)
    assert a.get(index) == -5
    changed = [i for i, (new, old) in enumerate(zip(a.data, range(size))) if new != old]
    assert len(changed) == 1


def test_repeat_takes_value_before_shape():
    a = repeat(7, [2, 1])
    assert a.shape == (2, 1)
    assert a.data == [7, 7]
    assert repeat(0.5, 3).data == [0.5, 0.5, 0.5]
    assert repeat(2, [3, 3]).array_equal(full([3, 3], 2))
