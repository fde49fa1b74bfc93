import pytest

from gallery.assembler import assemble, assemble_payload, map_sources, parse_payload
from gallery.errors import MissingRequiredField, ParseFailure
from gallery.models import ExtractionResult


def test_sources_filtering():
    chunks = [
        {"web": {"title": "A", "uri": "http://a"}},
        {"web": {"uri": ""}},
        {"web": {"title": "B"}},
    ]
    out = map_sources(chunks)
    assert [(s.title, s.uri) for s in out] == [("A", "http://a")]


def test_sources_default_title_and_noise():
    out = map_sources([{"web": {"uri": "http://b"}}, {}, {"web": None}, "junk"])
    assert [(s.title, s.uri) for s in out] == [("Search Result", "http://b")]
    assert map_sources(None) == []


def test_parse_payload_rejects_non_json():
    with pytest.raises(ParseFailure) as ei:
        parse_payload("Sorry, I could not find that listing.")
    assert "unable to parse the gallery metadata" in str(ei.value)
    with pytest.raises(ParseFailure):
        parse_payload("[1, 2, 3]")


def test_parse_payload_fenced_and_empty():
    assert parse_payload('```json\n{"address": "1 Main St"}\n```') == {"address": "1 Main St"}
    assert parse_payload(None) == {}
    assert parse_payload("   ") == {}


def test_assemble_missing_address():
    with pytest.raises(MissingRequiredField) as ei:
        assemble({"price": "$1"}, [], [])
    assert ei.value.field == "address"
    with pytest.raises(MissingRequiredField):
        assemble({"address": "   "}, [], [])


def test_assemble_end_to_end():
    meta = {"address": "12 Oak Ln, Austin, TX", "price": "$750,000", "beds": 3, "baths": "2.5"}
    raw_images = [
        {"url": "https://x.com/img.jpg?w=100", "description": "Front"},
        {"url": "https://x.com/img.jpg?w=800"},
        {"url": "https://example.com/agent-logo.svg"},
        {"url": "not a url"},
        {"url": "https://cdn.example.com/assetXYZ"},
    ]
    res = assemble(meta, raw_images, [{"web": {"title": "Zillow", "uri": "https://zillow.com/x"}}])
    assert isinstance(res, ExtractionResult)
    assert res.property.address == "12 Oak Ln, Austin, TX"
    assert res.property.beds == "3"
    assert res.property.sqft is None
    assert [i.url for i in res.property.images] == ["https://x.com/img.jpg?w=100", "https://cdn.example.com/assetXYZ"]
    assert res.property.images[1].description == "Property View"
    assert res.sources[0].title == "Zillow"
    assert not res.is_empty


def test_assemble_empty_images_is_not_an_error():
    res = assemble({"address": "1 Main St"}, "not-a-list", [])
    assert res.is_empty
    res = assemble_payload('{"address": "1 Main St"}')
    assert res.property.images == ()


def test_assemble_payload_malformed():
    with pytest.raises(ParseFailure):
        assemble_payload("<html>blocked</html>", [])


def test_result_is_frozen():
    res = assemble({"address": "1 Main St"}, [], [])
    with pytest.raises(Exception):
        res.sources = []
    dumped = res.model_dump(mode="json")
    assert dumped["property"]["images"] == []


def test_result_collections_are_immutable():
    res = assemble(
        {"address": "1 Main St"},
        [{"url": "https://x.com/a.jpg"}],
        [{"web": {"title": "A", "uri": "http://a"}}],
    )
    with pytest.raises(AttributeError):
        res.property.images.append(res.property.images[0])
    with pytest.raises(AttributeError):
        res.sources.append(res.sources[0])
    assert len(res.property.images) == 1


def test_parse_payload_deeply_nested():
    with pytest.raises(ParseFailure):
        assemble_payload("[" * 100000)


def test_non_scalar_metadata_treated_as_absent():
    with pytest.raises(MissingRequiredField):
        assemble_payload('{"address": {"street": ""}, "images": []}')
    with pytest.raises(MissingRequiredField):
        assemble({"address": ["1 Main St"]}, [], [])
    res = assemble({"address": "1 Main St", "price": {"amount": 5}, "beds": [3], "baths": True, "sqft": 1800.5}, [], [])
    assert (res.property.price, res.property.beds, res.property.baths) == (None, None, None)
    assert res.property.sqft == "1800.5"
