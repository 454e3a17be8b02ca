import typing
# only needed for type hints
import collections.abc
import attr  # third party

x = 1
