from demo.core import run
import click
from demo import __version__
import os
