import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "badel.settings")

application = get_wsgi_application()

from badel.startup import prime_ad_feed  # noqa: E402

prime_ad_feed()
