"""WSGI entrypoint for deploying the zzptax backend behind Passenger or gunicorn."""

from zzptax.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
