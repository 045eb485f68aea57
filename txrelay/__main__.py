"""Allow `python -m txrelay`."""

from txrelay.cli import run


run()
