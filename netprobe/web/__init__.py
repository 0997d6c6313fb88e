from .api import create_app, status_payload
