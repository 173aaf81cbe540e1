"""python -m sillisetup"""

from .cli.main import run

run()
