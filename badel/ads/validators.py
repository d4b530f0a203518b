import base64
import binascii
import io
import re

from django.conf import settings
from django.utils.translation import gettext_lazy as _
from PIL import Image, UnidentifiedImageError
from rest_framework import serializers

# Requires Pillow
BYTES_IN_MB = 1024 * 1024

DATA_URI_RE = re.compile(r"^data:image/(?P<subtype>[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


def validate_image_payload(value):
    """
    Validate one encoded image sent by the client.

    http(s) URLs are accepted as-is. Data URIs are decoded and checked against:
      1) max decoded size (MB)
      2) integrity + allowed formats (JPEG/PNG/WEBP by default)
      3) max dimensions (width/height)
    """
    if not isinstance(value, str) or not value:
        raise serializers.ValidationError(_("Each image must be a non-empty string."))

    if value.startswith(("http://", "https://")):
        return value

    match = DATA_URI_RE.match(value)
    if not match:
        raise serializers.ValidationError(_("Images must be base64 data URIs or http(s) URLs."))

    try:
        raw = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError):
        raise serializers.ValidationError(_("Image data is not valid base64."))

    # 1) size
    max_mb = int(getattr(settings, "AD_IMAGE_MAX_MB", 2))
    if len(raw) > max_mb * BYTES_IN_MB:
        raise serializers.ValidationError(_("Image too large: max %(mb)s MB") % {"mb": max_mb})

    # 2) format & integrity
    try:
        Image.open(io.BytesIO(raw)).verify()
        img = Image.open(io.BytesIO(raw))
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise serializers.ValidationError(_("Unsupported or corrupted image."))

    fmt = (img.format or "").upper()
    if fmt == "JPG":
        fmt = "JPEG"
    allowed = set(getattr(settings, "AD_IMAGE_ALLOWED_FORMATS", {"JPEG", "PNG", "WEBP"}))
    if fmt not in allowed:
        raise serializers.ValidationError(
            _("Unsupported format: %(fmt)s. Allowed: %(allowed)s") % {"fmt": fmt, "allowed": ", ".join(sorted(allowed))}
        )

    # 3) dimensions
    w, h = img.size
    max_w = int(getattr(settings, "AD_IMAGE_MAX_WIDTH", 4000))
    max_h = int(getattr(settings, "AD_IMAGE_MAX_HEIGHT", 4000))
    if w > max_w or h > max_h:
        raise serializers.ValidationError(
            _("Image too large: %(w)sx%(h)spx (max %(max_w)sx%(max_h)spx)")
            % {"w": w, "h": h, "max_w": max_w, "max_h": max_h}
        )
    return value


def validate_image_list(images):
    max_images = int(getattr(settings, "AD_MAX_IMAGES", 4))
    if len(images) > max_images:
        raise serializers.ValidationError(_("At most %(n)s images are allowed.") % {"n": max_images})
    for image in images:
        validate_image_payload(image)
    return images
