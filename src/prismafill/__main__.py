"""Run with: python -m prismafill"""

from prismafill.cli import main

main()
