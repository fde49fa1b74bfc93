from gallery.stages.canonical import canonicalize


def test_canonicalize_strips_query_and_fragment():
    assert canonicalize("https://x.com/img.jpg?w=100") == "https://x.com/img.jpg"
    assert canonicalize("https://x.com/img.jpg#top") == "https://x.com/img.jpg"
    assert canonicalize("https://x.com/img.jpg#a?b=1") == "https://x.com/img.jpg"
    assert canonicalize("https://x.com/img.jpg?b=1#a") == "https://x.com/img.jpg"


def test_canonicalize_passthrough():
    assert canonicalize("https://x.com/img.jpg") == "https://x.com/img.jpg"
    assert canonicalize("") == ""
    # filenames are compared character for character, not semantically
    assert canonicalize("https://photos.zillowstatic.com/a_p_e.jpg") != canonicalize(
        "https://photos.zillowstatic.com/a_p_f.jpg"
    )
