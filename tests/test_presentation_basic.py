from gallery.assembler import assemble
from gallery.presentation import address_hint, empty_message, open_all
from gallery.rendering.markdown import render_html, render_md


def _result(images=None):
    return assemble(
        {"address": "12 Oak Ln", "price": "$500,000", "beds": "3", "sqft": "1,800"},
        images if images is not None else [
            {"url": "https://x.com/a.jpg", "description": "Kitchen"},
            {"url": "https://x.com/b.jpg"},
        ],
        [{"web": {"title": "Zillow", "uri": "https://zillow.com/h/1"}}],
    )


def test_address_hint():
    url = "https://www.redfin.com/TX/Austin/12-Oak-Ln-78701"
    assert address_hint(url) == "12 Oak Ln 78701"
    assert address_hint("https://x.com/listing/") == "https://x.com/listing/"
    assert address_hint("12 Oak Ln") == "12 Oak Ln"


def test_empty_message_mentions_address_retry():
    msg = empty_message("https://www.zillow.com/homedetails/12-Oak-Ln")
    assert "No public image assets" in msg
    assert "12 Oak Ln" in msg


def test_open_all_spacing_and_count():
    opened = []
    n = open_all(_result(), delay=0, opener=lambda u: opened.append(u) or True)
    assert n == 2
    assert opened == ["https://x.com/a.jpg", "https://x.com/b.jpg"]


def test_open_all_counts_refusals():
    assert open_all(_result(), delay=0, opener=lambda u: False) == 0


def test_render_md():
    md = render_md(_result())
    assert md.startswith("# 12 Oak Ln")
    assert "**$500,000** · 3 Beds · 1,800 Sq Ft" in md
    assert "_Extracted 2 images_" in md
    assert "1. [Kitchen](https://x.com/a.jpg)" in md
    assert "2. [Property View](https://x.com/b.jpg)" in md
    assert "- [Zillow](https://zillow.com/h/1)" in md


def test_render_md_empty_gallery():
    md = render_md(_result(images=[]))
    assert "_Extracted 0 images_" in md
    assert "## Gallery" not in md


def test_render_html_escapes():
    res = assemble({"address": "1 <Main> St"}, [{"url": "https://x.com/a.jpg?a=1&b=2"}], [])
    page = render_html(res)
    assert "1 &lt;Main&gt; St" in page
    assert 'src="https://x.com/a.jpg?a=1&amp;b=2"' in page
