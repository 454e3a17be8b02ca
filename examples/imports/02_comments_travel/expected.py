# only needed for type hints
import collections.abc
import typing

import attr  # third party

x = 1
