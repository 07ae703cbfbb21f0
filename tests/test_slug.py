import pytest

from mf2publisher.slug import file_slug, slugify, split_words, strip_html


def test_slugify_basic():
    assert slugify("awesomeness is awesome") == "awesomeness-is-awesome"


def test_slugify_limits_word_count():
    assert slugify("One Two Three Four Five Six Seven") == "one-two-three-four-five"
    assert slugify("One Two Three Four Five Six Seven", 3) == "one-two-three"
    assert slugify("One Two Three", None) == "one-two-three"


def test_slugify_splits_abbreviations_and_camel_case():
    assert slugify("Another CSS-feature is the FooBar", None) == "another-css-feature-is-the-foo-bar"
    assert slugify("Another CSS-feature is the FooBar") == "another-css-feature-is-the"
    assert slugify("CSSFeature") == "css-feature"
    assert split_words("FooBar") == "Foo Bar"


def test_slugify_transliterates():
    assert slugify("ÖverÄnda på Slottet") == "over-anda-pa-slottet"
    assert slugify("Český Krumlov") == "cesky-krumlov"


def test_slugify_trims_dashes():
    assert slugify(",One Two Three Four Five, Six Seven") == "one-two-three-four-five"
    assert slugify("--hello--  --world--") == "hello-world"


def test_slugify_strips_html_every_time():
    html = "<h1>Foo</h1> Bar &amp; <strong>Abc</strong>"
    assert slugify(html) == "foo-bar-abc"
    assert slugify(html) == "foo-bar-abc"


@pytest.mark.parametrize("text", ["", "   ", "\n\t", "!!! ,,, ---"])
def test_slugify_degenerate_input(text):
    assert slugify(text) == ""


@pytest.mark.parametrize("text", [
    "A B C D E F G H",
    "-Leading and trailing-",
    "MixedCaseWordsEverywhereInThisTitleHere",
    "snake_case_words_with_lots_of_parts",
    "ÅÄÖ åäö ÆØ æø ß ü",
    "<p>Some <em>marked</em> up text, with punctuation!</p>",
])
def test_slugify_bounds(text):
    slug = slugify(text, 5)
    assert len(slug.split("-")) <= 5
    assert not slug.startswith("-")
    assert not slug.endswith("-")
    assert slugify(text, 5) == slug


def test_strip_html():
    assert strip_html("<p>Hello <b>there</b></p><script>x()</script>") == "Hello there"


@pytest.mark.parametrize("filename,expected", [
    ("example.jpg", "example.jpg"),
    ("123.ExampleIs Very-Cool.jpg", "123.example-is-very-cool.jpg"),
    ("path/to/IMG_001.PNG", "img-001.png"),
    ("Ångström Photo.jpg", "angstrom-photo.jpg"),
    ("no-extension", "no-extension"),
    ("???.gif", "file.gif"),
])
def test_file_slug(filename, expected):
    assert file_slug(filename) == expected
