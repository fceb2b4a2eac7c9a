import math

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from ndtensor import (
    ExecutionConfig,
    InvalidArgument,
    NDArray,
    ShapeMismatch,
    abs,
    add,
    apply_binary,
    clip,
    create_array,
    div,
    exp,
    mul,
    neg,
    pow,
    sub,
    to_numpy,
    zeros,
)


def test_add_scalars_and_arrays():
    a = create_array([[1, 2, 3], [4, 5, 6]])
    b = create_array([[2, 1, 3], [3, 4, 0]])
    c = create_array([[1], [2]])

    assert add(10, 21).get() == 31
    assert add(10, 21).shape == (1,)

    r2 = add(a, 1)
    assert r2.shape == (2, 3)
    assert r2.get([0, 0]) == 2
    assert r2.get([0, 1]) == 3
    assert r2.get([1, 1]) == 6

    r3 = add(a, b)
    assert r3.data == [3, 3, 6, 7, 9, 6]

    r4 = add(a, c)
    assert r4.shape == (2, 3)
    assert r4.get([0, 0]) == 2
    assert r4.get([1, 1]) == 7


def test_out_array_is_filled_and_returned():
    a = create_array([[1, 2, 3], [4, 5, 6]])
    c = create_array([[1], [2]])
    d = zeros([2, 3])
    r5 = add(a, c, d)
    assert r5 is d
    assert r5.data == add(a, c).data


def test_out_shape_mismatch_leaves_out_untouched():
    a = create_array([[1, 2, 3], [4, 5, 6]])
    out = zeros([3, 2])
    with pytest.raises(ShapeMismatch):
        add(a, 1, out)
    assert out.data == [0] * 6


def test_scalar_shaped_array_equals_bare_scalar():
    a = create_array([[1, 2, 3], [4, 5, 6]])
    assert add(a, NDArray([5], [1, 1])).array_equal(add(a, 5))


def test_incompatible_shapes_raise():
    a = create_array([[1, 2, 3], [4, 5, 6]])
    with pytest.raises(ShapeMismatch):
        add(a, create_array([[1, 2], [3, 4]]))


def test_rank_promotion_prepends_axes():
    a = create_array([[1, 2, 3], [4, 5, 6]])
    row = create_array([10, 20, 30])
    assert add(a, row).data == [11, 22, 33, 14, 25, 36]
    assert add(row, a).shape == (2, 3)
    with pytest.raises(ShapeMismatch):
        add(a, row, config=ExecutionConfig(rank_promotion=False))


def test_arithmetic_operators():
    a = create_array([[1, 2], [3, 4]])
    assert sub(a, 1).data == [0, 1, 2, 3]
    assert sub(1, a).data == [0, -1, -2, -3]
    assert mul(a, a).data == [1, 4, 9, 16]
    assert div(a, 2).data == [0.5, 1.0, 1.5, 2.0]
    assert pow(a, 2).data == [1, 4, 9, 16]
    assert pow(2, a).data == [2, 4, 8, 16]


def test_dunder_operators_route_through_broadcasting():
    a = create_array([1, 2, 3])
    assert (a + 1).data == [2, 3, 4]
    assert (1 + a).data == [2, 3, 4]
    assert (a - a).data == [0, 0, 0]
    assert (10 - a).data == [9, 8, 7]
    assert (a * 2).data == [2, 4, 6]
    assert (3 / a).data == [3.0, 1.5, 1.0]
    assert (a**2).data == [1, 4, 9]
    assert (2**a).data == [2, 4, 8]
    assert (-a).data == [-1, -2, -3]
    assert (-a).__abs__().data == [1, 2, 3]


def test_division_by_zero_follows_float_semantics():
    result = div(create_array([1, -1, 0]), 0)
    assert result.data[0] == math.inf
    assert result.data[1] == -math.inf
    assert math.isnan(result.data[2])
    assert div(1, -0.0).get() == -math.inf


def test_division_by_zero_can_raise():
    with pytest.raises(ZeroDivisionError):
        div(1, 0, config=ExecutionConfig(division="raise"))


def test_failed_operation_does_not_write_out():
    out = zeros([2])
    with pytest.raises(ZeroDivisionError):
        div(create_array([1, 2]), create_array([1, 0]), out, config=ExecutionConfig(division="raise"))
    assert out.data == [0, 0]


def test_pow_stays_real():
    assert math.isnan(pow(-8, 1 / 3).get())
    assert pow(0, -1).get() == math.inf
    assert pow(-0.0, -1).get() == -math.inf
    assert pow(10.0, 1000).get() == math.inf


def test_unary_operators():
    a = create_array([[1, -2], [3, 0]])
    n = neg(a)
    assert n.data == [-1, 2, -3, 0]
    assert abs(create_array([0, -2, 3, 1])).data == [0, 2, 3, 1]
    assert exp(create_array([0])).data == [1.0]
    assert exp(1000).get() == math.inf

    b = zeros(a.shape)
    m = neg(a, b)
    assert m is b
    assert m.data == n.data


def test_clip():
    a = create_array([[1, 2, 3], [5, 3, 10]])
    c = clip(a, 2, 5)
    assert c.shape == a.shape
    assert c.data == [2, 2, 3, 5, 3, 5]
    assert c.tolist() == [[2, 2, 3], [5, 3, 5]]

    d = zeros(a.shape)
    e = a.clip(2, 5, d)
    assert e is d
    assert e.data == c.data
    with pytest.raises(InvalidArgument):
        clip(a, 5, 2)


def test_unary_out_shape_must_match():
    with pytest.raises(ShapeMismatch):
        neg(create_array([1, 2]), zeros([3]))


def test_rejects_non_numeric_operands():
    with pytest.raises(InvalidArgument):
        add(create_array([1]), "x")


def test_apply_binary_with_custom_kernel():
    a = create_array([[1, 5], [7, 2]])
    result = apply_binary(max, a, 3)
    assert result.data == [3, 5, 7, 3]


@st.composite
def broadcastable_pairs(draw):
    rank = draw(st.integers(min_value=1, max_value=3))
    full = [draw(st.integers(min_value=1, max_value=4)) for _ in range(rank)]
    left = [dim if draw(st.booleans()) else 1 for dim in full]
    right = [dim if draw(st.booleans()) else 1 for dim in full]
    drop = draw(st.integers(min_value=0, max_value=rank - 1))
    right = right[drop:]

    def build(shape):
        size = int(np.prod(shape))
        values = draw(st.lists(st.integers(min_value=-9, max_value=9), min_size=size, max_size=size))
        return NDArray(values, shape)

    return build(left), build(right)


@given(broadcastable_pairs())
@settings(max_examples=60)
def test_broadcasting_matches_numpy(pair):
    left, right = pair
    for op, np_op in ((add, np.add), (sub, np.subtract), (mul, np.multiply)):
        result = op(left, right)
        expected = np_op(to_numpy(left), to_numpy(right))
        assert result.shape == expected.shape
        assert result.data == expected.reshape(-1).tolist()
