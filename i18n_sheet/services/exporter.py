from __future__ import annotations

from collections.abc import Iterable

from ..models.tabular import FileDataset, TabularGrid
from ..models.value_tree import Mapping
from .path_codec import flatten

"""Export flattened translation files into one two-column grid.

Layout:
    Key | Value            (header)
    rows of file 1
    <blank>
    <blank>
    rows of file 2
    ...

No conflict checking happens here; the grid is a plain concatenation.
"""

__all__ = [
    "EXPORT_HEADER",
    "SEPARATOR_ROWS",
    "dataset_from_tree",
    "export_grid",
]

EXPORT_HEADER = ["Key", "Value"]
SEPARATOR_ROWS = 2


def dataset_from_tree(filename: str, tree: Mapping) -> FileDataset:
    """Flatten one parsed document into its (key, value) rows."""
    return FileDataset(filename=filename, rows=list(flatten(tree).items()))


def export_grid(datasets: Iterable[FileDataset]) -> TabularGrid:
    grid: TabularGrid = [list(EXPORT_HEADER)]
    for i, dataset in enumerate(datasets):
        if i > 0:
            # ファイル間のみ区切り行を挿入 (最後の後ろには入れない)
            grid.extend([] for _ in range(SEPARATOR_ROWS))
        grid.extend([key, value] for key, value in dataset.rows)
    return grid
