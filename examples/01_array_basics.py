"""Walk through the main array operations on small inputs."""

from ndtensor import ALL, NEW_AXIS, Range, argmax, clip, create_array, einsum, mean

grid = create_array(
    [
        [1, 2, 3, 4, 5, 6],
        [7, 8, 9, 0, 1, 2],
        [3, 4, 5, 6, 7, 8],
        [9, 0, 1, 2, 3, 4],
    ]
)

# Ranged slicing: rows 1..2, every other column starting at 1
window = grid.slice(Range(1, 3), Range(1, 4, 2))
print("window", window.shape, window.tolist())

# New axes do not consume a source axis
column = grid.slice(ALL, NEW_AXIS, 1)
print("column", column.shape, column.tolist())

# Broadcasting: subtract the per-row mean
centered = grid - mean(grid, [1]).reshape([-1, 1])
print("centered", centered.tolist())

# Reductions and clipping
print("argmax per row", argmax(grid, 1).tolist())
print("clipped", clip(grid, 2, 5).tolist())

# Index-named contraction: Gram matrix of the rows
gram = einsum("r,c; s,c -> r,s", grid, grid)
print("gram", gram.shape, gram.tolist())
