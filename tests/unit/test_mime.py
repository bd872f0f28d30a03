import pytest

from core.mime import content_type_for_extension, extension_for_content_type


def test_content_type_for_extension():
    assert content_type_for_extension(".html") == "text/html; charset=utf-8"
    assert content_type_for_extension(".png") == "image/png"
    assert content_type_for_extension(".json") == "application/json; charset=utf-8"
    assert content_type_for_extension("PNG") == "image/png"


def test_unknown_extension_is_plain_text():
    assert content_type_for_extension(".nosuchext") == "text/plain"


def test_extension_for_content_type():
    assert extension_for_content_type("image/png") == "png"
    assert extension_for_content_type("text/html; charset=utf-8") == "html"
    assert extension_for_content_type("application/json") == "json"


def test_unknown_content_type_is_bin():
    assert extension_for_content_type("application/x-nothing-like-this") == "bin"
    assert extension_for_content_type("") == "bin"


@pytest.mark.parametrize(
    "content_type, ext",
    [
        ("text/javascript", "js"),
        ("application/javascript", "js"),
        ("application/x-javascript", "js"),
        ("font/woff", "woff"),
        ("font/woff2", "woff2"),
        ("audio/ogg", "ogg"),
        ("image/x-icon", "ico"),
        ("application/xml", "xml"),
    ],
)
def test_common_upload_types_get_their_extension(content_type, ext):
    assert extension_for_content_type(content_type) == ext


def test_script_extensions_are_text_javascript():
    assert content_type_for_extension(".js") == "text/javascript; charset=utf-8"
    assert content_type_for_extension(".mjs") == "text/javascript; charset=utf-8"


def test_registered_extensions_round_trip_to_their_type():
    assert content_type_for_extension(".woff") == "font/woff"
    assert content_type_for_extension(".ogg") == "audio/ogg"
    assert content_type_for_extension(".ico") == "image/x-icon"
    assert content_type_for_extension(".xml") == "application/xml"
