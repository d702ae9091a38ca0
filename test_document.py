#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Test the document model
"""

import pytest

from DocSeeker.preprocessing.document import Document, build_document


def test_build_document_counts_terms():
    doc = build_document("a.txt", "a b a")
    assert dict(doc.terms) == {"A": 2, "B": 1}
    assert doc.total_terms == 3


def test_term_frequency():
    doc = build_document("a.txt", "a b a")
    assert doc.term_frequency("A") == pytest.approx(2 / 3)
    assert doc.term_frequency("B") == pytest.approx(1 / 3)
    assert doc.term_frequency("C") == 0


def test_empty_document_has_zero_frequency():
    doc = build_document("empty.txt", "   ")
    assert doc.total_terms == 0
    assert doc.term_frequency("A") == 0


def test_term_table_is_read_only():
    doc = build_document("a.txt", "a")
    with pytest.raises(TypeError):
        doc.terms["B"] = 5
    assert doc.total_terms == sum(doc.terms.values())


def test_invalid_count_is_rejected():
    with pytest.raises(ValueError):
        Document("a.txt", {"A": 0})


def test_dict_round_trip():
    doc = build_document("docs/a.html", "cat dog cat")
    assert Document.from_dict(doc.to_dict()) == doc


@pytest.mark.parametrize("record", [
    {"term_frequency": {"A": 1}},
    {"path": "a.txt", "term_frequency": ["A"]},
    ["a.txt"],
])
def test_from_dict_rejects_bad_records(record):
    with pytest.raises(ValueError):
        Document.from_dict(record)


@pytest.mark.parametrize("count", [2.7, True, "3"])
def test_non_integer_count_is_rejected(count):
    with pytest.raises(ValueError):
        Document("a.txt", {"A": count})
