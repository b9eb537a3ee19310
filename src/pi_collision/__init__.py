"""
Pi collision simulator package.

We keep this __init__ lightweight on purpose so that
`import pi_collision` and `pi-collision --help` work
without pulling in matplotlib or pandas.
"""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("pi-collision")
except PackageNotFoundError:  # during editable installs
    __version__ = "0.0.0"

__all__ = ["__version__"]
