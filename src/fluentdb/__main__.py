"""``python -m fluentdb``"""

from fluentdb.cli.app import app

app()
