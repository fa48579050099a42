from io import BytesIO

import pytest
import requests
from PIL import Image
from requests.structures import CaseInsensitiveDict


def encode_image(image: Image.Image, fmt: str = "PNG") -> bytes:
    buf = BytesIO()
    image.save(buf, format=fmt)
    return buf.getvalue()


class FakeResponse:
    """Just enough of requests.Response for image downloads."""

    def __init__(self, content=b"", status_code=200, headers=None, body_error=None):
        self._content = content
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(headers or {})
        self._body_error = body_error
        self.closed = False

    @property
    def content(self):
        if self._body_error is not None:
            raise self._body_error
        return self._content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True
        return False


@pytest.fixture
def save_image(tmp_path):
    """Save an image under tmp_path and return its path."""

    def _save(image: Image.Image, name: str = "input.png"):
        path = tmp_path / name
        image.save(path)
        return path

    return _save


@pytest.fixture
def fake_get(monkeypatch):
    """Replace requests.get with one returning (or raising) a canned result.

    Returns a list that collects (url, kwargs) for every call made.
    """
    calls = []

    def install(result):
        def get(url, **kwargs):
            calls.append((url, kwargs))
            if isinstance(result, Exception):
                raise result
            return result

        monkeypatch.setattr(requests, "get", get)
        return calls

    return install
