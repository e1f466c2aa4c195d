"""WSGI entrypoint for Gunicorn.

Usage:
  gunicorn -w 2 -b 0.0.0.0:5000 wsgi:app

Draws are serialized per activity inside each worker process and across
workers by the database (row locks on Postgres, version stamps everywhere).
"""

from raffle import create_app

app = create_app()
