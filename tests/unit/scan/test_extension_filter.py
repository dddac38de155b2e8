from __future__ import annotations

from wfam.scan import ExtensionFilter, file_extension


def test_parse_drops_tokens_without_leading_dot() -> None:
    ext_filter = ExtensionFilter.parse(".JPG, .jpeg,png,,")

    assert ext_filter.extensions == frozenset({".jpg", ".jpeg"})
    assert ext_filter.active


def test_empty_resulting_set_means_no_filtering() -> None:
    for raw in (None, "", "jpg,png", ","):
        ext_filter = ExtensionFilter.parse(raw)
        assert not ext_filter.active
        assert ext_filter.accepts("notes.txt")
        assert ext_filter.accepts("Makefile")


def test_accepts_is_case_insensitive() -> None:
    ext_filter = ExtensionFilter.parse(".jpg")

    assert ext_filter.accepts("IMG_0001.JPG")
    assert ext_filter.accepts("img_0001.jpg")
    assert not ext_filter.accepts("notes.txt")
    assert not ext_filter.accepts("archive.jpg.zip")
    assert not ext_filter.accepts("no_extension")


def test_file_extension_rules() -> None:
    assert file_extension("photo.jpeg") == ".jpeg"
    assert file_extension("archive.tar.gz") == ".gz"
    assert file_extension(".bashrc") == ".bashrc"
    assert file_extension("trailing.") == ""
    assert file_extension("README") == ""
