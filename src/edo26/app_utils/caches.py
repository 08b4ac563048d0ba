# SPDX-FileCopyrightText: Copyright (C) 2025 ARDUINO SA <http://www.arduino.cc>
#
# SPDX-License-Identifier: MPL-2.0

from collections import OrderedDict
from typing import Any, Callable, Hashable


class LRUDict(OrderedDict):
    """A mapping with a fixed size that evicts the least recently used entries.

    A ``maxsize`` of 0 disables storage entirely: every lookup misses.
    """

    def __init__(self, maxsize: int = 128, *args, **kwargs):
        if maxsize < 0:
            raise ValueError(f"maxsize must be >= 0, got {maxsize}")
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        super().__init__(*args, **kwargs)

    def __getitem__(self, key):
        value = super().__getitem__(key)
        self.move_to_end(key)
        return value

    def __setitem__(self, key, value):
        if self.maxsize == 0:
            return
        if key in self:
            self.move_to_end(key)

        super().__setitem__(key, value)

        while len(self) > self.maxsize:
            # Oldest entry sits at the front
            self.popitem(last=False)

    def get_or_create(self, key: Hashable, factory: Callable[[], Any]) -> Any:
        """Return the cached value for ``key``, building it with ``factory`` on a miss.

        Args:
            key (Hashable): Cache key.
            factory (Callable[[], Any]): Called without arguments to produce a missing value.

        Returns:
            Any: The cached or freshly created value.
        """
        if key in self:
            self.hits += 1
            return self[key]
        self.misses += 1
        value = factory()
        self[key] = value
        return value
