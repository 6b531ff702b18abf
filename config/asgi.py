"""
ASGI config for the Task Manager API.

Serve with any ASGI server, e.g. `uvicorn config.asgi:application --port $PORT`.
The server owns the port; `PORT` itself is only read by `manage.py runserver`.
The database connection is verified before the application is handed to the
server, and SIGINT/SIGTERM close it again on the way out.
"""
import os

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

from django.core.asgi import get_asgi_application

# Initialize Django application at module load time (process startup)
application = get_asgi_application()

from apps.core.database import connect_db, install_shutdown_handlers

connect_db()
install_shutdown_handlers()
