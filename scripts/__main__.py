"""Allow `python -m scripts` by running the editor import with its default data file."""

from scripts.import_editors import main

main([])
