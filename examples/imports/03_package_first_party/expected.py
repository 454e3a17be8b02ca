import os

import click

from demo import __version__
from demo.core import run
