"""Allow ``python -m protonge_installer``."""

from protonge_installer.main import main

main()
