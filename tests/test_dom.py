from bs4 import BeautifulSoup

from iphone_meta.dom import (
    create_element,
    existing_rels,
    head_element,
    parse_document,
    root_element,
    serialize,
    tidy_markup,
)

PAGE = (
    "<html><head><title>Home</title>"
    '<link rel="stylesheet" href="site.css">'
    '<link rel="apple-touch-icon" href="old.png">'
    "</head><body><p>Hello</p></body></html>"
)


def test_create_element_sets_attributes_in_order():
    document = parse_document(PAGE)

    element = create_element(document, "meta", [("name", "viewport"), ("content", "width = 320")])

    assert element.name == "meta"
    assert list(element.attrs.items()) == [("name", "viewport"), ("content", "width = 320")]
    assert element.parent is None


def test_root_and_head_lookup():
    document = parse_document(PAGE)

    assert root_element(document).name == "html"
    assert head_element(document).find("title").string == "Home"


def test_implied_head_is_filled_in():
    document = parse_document("<!DOCTYPE html><title>x</title><p>hi</p>")

    assert root_element(document).name == "html"
    assert head_element(document).find("title").string == "x"
    assert document.body.p.string == "hi"


def test_existing_rels_collects_link_rels_in_head():
    document = parse_document(PAGE)

    rels = existing_rels(head_element(document))

    assert {"stylesheet", "apple-touch-icon"} <= rels


def test_existing_rels_ignores_links_without_rel():
    document = parse_document('<html><head><link href="x.css"></head></html>')

    assert existing_rels(head_element(document)) == set()


def test_existing_rels_keeps_multi_token_values_whole():
    document = parse_document('<html><head><link rel="icon apple-touch-icon" href="i.png"></head></html>')

    rels = existing_rels(head_element(document))

    assert rels == {"icon apple-touch-icon"}


def test_tidy_markup_reindents_without_changing_content():
    tidied = tidy_markup(PAGE)

    assert tidied != PAGE
    assert "\n" in tidied
    assert "tidy" not in tidied.lower()
    before = BeautifulSoup(PAGE, "html.parser")
    after = BeautifulSoup(tidied, "html.parser")
    assert [(tag.name, tag.attrs) for tag in before.find_all(True)] == [
        (tag.name, tag.attrs) for tag in after.find_all(True)
    ]
    assert after.title.get_text(strip=True) == "Home"


def test_serialize_round_trips_text_content():
    document = parse_document(PAGE)

    html = serialize(document)

    assert html.startswith("<html><head><title>Home</title>")
    assert html.endswith("<body><p>Hello</p></body></html>")
