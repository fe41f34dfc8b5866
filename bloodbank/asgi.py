"""
ASGI config for the bloodbank project.

Only plain HTTP is served; there are no WebSocket routes.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bloodbank.settings")

application = get_asgi_application()
