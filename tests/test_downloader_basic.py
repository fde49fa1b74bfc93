from types import SimpleNamespace

import requests

from gallery.assembler import assemble
from gallery.downloader import download_images, photo_filename


class FakeSession:
    def __init__(self, fail=()):
        self.fail = set(fail)
        self.urls = []

    def get(self, url, timeout=None, headers=None):
        self.urls.append(url)
        if url in self.fail:
            def boom():
                raise requests.HTTPError("403 Forbidden")
            return SimpleNamespace(content=b"", raise_for_status=boom)
        return SimpleNamespace(content=b"img:" + url.encode(), raise_for_status=lambda: None)


def test_photo_filename():
    assert photo_filename("https://x.com/a.PNG?w=1", 0) == "property-photo-1.png"
    assert photo_filename("https://cdn.x.com/asset", 4) == "property-photo-5.jpg"


def test_download_skips_failures(tmp_path):
    res = assemble(
        {"address": "1 Main St"},
        [{"url": "https://x.com/a.jpg"}, {"url": "https://x.com/b.webp"}, {"url": "https://x.com/c.png"}],
        [],
    )
    session = FakeSession(fail={"https://x.com/b.webp"})
    saved = download_images(res, str(tmp_path), session=session)
    names = sorted(p.rsplit("/", 1)[-1] for p in saved)
    assert names == ["property-photo-1.jpg", "property-photo-3.png"]
    assert (tmp_path / "property-photo-1.jpg").read_bytes() == b"img:https://x.com/a.jpg"
    assert len(session.urls) == 3
