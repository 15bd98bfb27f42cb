"""Top-level package for protonge-installer.

Installs GE-Proton releases into Steam's compatibility tools directory.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("protonge-installer")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
