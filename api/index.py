# api/index.py
from app import create_app

# WSGI entrypoint; the hosting platform runs the server
app = create_app()
