import base64
import io

from django.test import SimpleTestCase, override_settings
from PIL import Image
from rest_framework import serializers

from badel.ads.validators import validate_image_payload, validate_image_list


def data_uri(fmt="PNG", size=(8, 8)):
    buf = io.BytesIO()
    Image.new("RGB", size, "white").save(buf, format=fmt)
    mime = {"PNG": "png", "JPEG": "jpeg", "GIF": "gif"}[fmt]
    return f"data:image/{mime};base64,{base64.b64encode(buf.getvalue()).decode()}"


class ImagePayloadValidationTests(SimpleTestCase):
    def test_png_and_jpeg_data_uris_pass(self):
        for fmt in ("PNG", "JPEG"):
            value = data_uri(fmt)
            self.assertEqual(validate_image_payload(value), value)

    def test_remote_urls_pass_through(self):
        url = "https://cdn.example.com/ad/1.jpg"
        self.assertEqual(validate_image_payload(url), url)

    def test_rejects_garbage(self):
        for value in ("", "not-an-image", "data:image/png;base64,@@@", 42):
            with self.assertRaises(serializers.ValidationError):
                validate_image_payload(value)

    def test_rejects_valid_base64_that_is_not_an_image(self):
        value = "data:image/png;base64," + base64.b64encode(b"hello world").decode()
        with self.assertRaises(serializers.ValidationError):
            validate_image_payload(value)

    def test_rejects_disallowed_format(self):
        with self.assertRaises(serializers.ValidationError):
            validate_image_payload(data_uri("GIF"))

    @override_settings(AD_IMAGE_MAX_WIDTH=4, AD_IMAGE_MAX_HEIGHT=4)
    def test_rejects_oversized_dimensions(self):
        with self.assertRaises(serializers.ValidationError):
            validate_image_payload(data_uri("PNG", size=(8, 8)))

    @override_settings(AD_MAX_IMAGES=2)
    def test_list_limit(self):
        images = [data_uri(), data_uri()]
        self.assertEqual(validate_image_list(images), images)
        with self.assertRaises(serializers.ValidationError):
            validate_image_list(images + [data_uri()])
