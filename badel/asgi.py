import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "badel.settings")

application = get_asgi_application()

from badel.startup import prime_ad_feed  # noqa: E402

prime_ad_feed()
