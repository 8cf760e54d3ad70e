"""Notes app gateway — ASGI entry point built from the route file.

Run it with the CLI::

    waypoint run examples/notes_app/routes.yaml

or point any ASGI server at ``app``.
"""

from pathlib import Path

from waypoint import Gateway, load_file

table, config = load_file(Path(__file__).with_name("routes.yaml"))
app = Gateway(table, config)
