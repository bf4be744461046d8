# -*- coding: utf-8 -*-


"""
common utils for hashstore
"""


from typing import List, Union

import fs as pyfs
from fs.base import FS


def compact(items):
    """Return only truthy elements of `items`."""
    return [item for item in items if item]


def shard(digest, depth, width) -> List[str]:
    # This creates a list of `depth` number of tokens with width
    # `width` from the first part of the id plus the remainder.
    return compact(
        [digest[i * width : width * (i + 1)] for i in range(depth)]
        + [digest[depth * width :]]
    )


def load_fs(root: Union[FS, str]) -> FS:
    """Return a filesystem for `root`.

    Args:
        root: An open ``FS`` instance, or an FS URL / local directory path
            which is opened (and created if missing).
    """
    if isinstance(root, FS):
        return root

    return pyfs.open_fs(root, create=True)
