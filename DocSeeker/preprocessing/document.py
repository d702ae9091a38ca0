from collections import Counter
from types import MappingProxyType
from typing import Dict, Mapping

from .lexer import tokenize


class Document:
    """
    Represents one indexed file: its path and how often each term occurs in it.
    The term table is read-only once the document exists, so the total
    number of terms always matches it.
    """

    def __init__(self, path: str, term_frequency: Mapping[str, int] = None):
        """
        Initialize a document from an existing term table.

        Args:
            path: Identifier of the document, unique within a corpus
            term_frequency: Mapping of term to occurrence count (counts >= 1)
        """
        table = {}
        for term, count in (term_frequency or {}).items():
            if not isinstance(count, int) or isinstance(count, bool):
                raise ValueError(f"Term {term!r} in {path} has non-integer count {count!r}")
            if count < 1:
                raise ValueError(f"Term {term!r} in {path} has invalid count {count}")
            table[str(term)] = count

        self.path = path
        self._terms = MappingProxyType(table)
        self.total_terms = sum(table.values())

    @property
    def terms(self) -> Mapping[str, int]:
        """Read-only view of the term table"""
        return self._terms

    def count(self, term: str) -> int:
        return self._terms.get(term, 0)

    def term_frequency(self, term: str) -> float:
        """
        Fraction of this document's term occurrences that are the given term.

        Args:
            term: Normalized term

        Returns:
            count(term) / total_terms, or 0.0 for an absent term or empty document
        """
        if self.total_terms == 0:
            return 0.0
        return self.count(term) / self.total_terms

    def to_dict(self) -> Dict:
        return {"path": self.path, "term_frequency": dict(self._terms)}

    @classmethod
    def from_dict(cls, record: Mapping) -> 'Document':
        """
        Create a document from a persisted record.

        Args:
            record: Mapping with "path" and "term_frequency" fields

        Returns:
            The reconstructed Document
        """
        if not isinstance(record, Mapping):
            raise ValueError(f"Document record must be an object, got {type(record).__name__}")
        path = record.get("path")
        table = record.get("term_frequency", {})
        if not isinstance(path, str) or not path:
            raise ValueError("Document record has no path")
        if not isinstance(table, Mapping):
            raise ValueError(f"Term table of {path} must be an object")
        return cls(path, table)

    def __eq__(self, other):
        if not isinstance(other, Document):
            return NotImplemented
        return self.path == other.path and dict(self._terms) == dict(other._terms)

    def __repr__(self):
        return f"Document(path={self.path!r}, unique_terms={len(self._terms)}, total_terms={self.total_terms})"


def build_document(path: str, text: str) -> Document:
    """Tokenize text and count its terms into a new Document."""
    return Document(path, Counter(tokenize(text)))
