import json
import math
import time
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..preprocessing.document import Document


class CorpusFormatError(ValueError):
    """Raised when persisted corpus data cannot be decoded."""


class Corpus:
    """
    Read-only collection of indexed documents with corpus-wide term statistics.
    Documents keep the order in which they were added.
    """

    def __init__(self, documents: Iterable[Document] = ()):
        """
        Initialize the corpus.

        Args:
            documents: Documents to hold; paths must be unique

        Raises:
            ValueError: If two documents share a path
        """
        self._documents: List[Document] = []
        self._by_path: Dict[str, Document] = {}
        self._document_frequency = Counter()

        for document in documents:
            if document.path in self._by_path:
                raise ValueError(f"Duplicate document path: {document.path}")
            self._documents.append(document)
            self._by_path[document.path] = document
            self._document_frequency.update(document.terms.keys())

    def __len__(self):
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, path):
        return path in self._by_path

    def get(self, path: str) -> Optional[Document]:
        return self._by_path.get(path)

    def paths(self) -> List[str]:
        return [document.path for document in self._documents]

    def document_frequency(self, term: str) -> int:
        """Number of documents whose term table contains the term"""
        return self._document_frequency.get(term, 0)

    def inverse_document_frequency(self, term: str) -> float:
        """
        Calculate the inverse document frequency for a term.
        IDF(t) = log10(N / max(1, DF(t)))

        A term found in no document is treated as if it were found in one,
        which gives log10(N) instead of infinity.

        Args:
            term: The term to calculate IDF for

        Returns:
            IDF value for the term, 0.0 for an empty corpus
        """
        n = len(self._documents)
        if n == 0:
            return 0.0
        m = max(1, self.document_frequency(term))
        return math.log10(n / m)

    def top_terms(self, limit: int = 10) -> List[Tuple[str, int]]:
        """Most frequent terms over all documents, with their total counts"""
        totals = Counter()
        for document in self._documents:
            totals.update(document.terms)
        return totals.most_common(limit)

    def to_dict(self) -> Dict:
        return {
            "metadata": {
                "document_count": len(self._documents),
                "term_count": len(self._document_frequency),
                "creation_date": time.strftime("%Y-%m-%d %H:%M:%S")
            },
            "documents": [document.to_dict() for document in self._documents]
        }

    @classmethod
    def from_dict(cls, data) -> 'Corpus':
        """
        Build a corpus from decoded JSON data.

        Accepted layouts:
            {"metadata": {...}, "documents": [record, ...]}
            [record, ...]
            {path: {term: count}, ...}   (flat term-frequency index)

        Raises:
            CorpusFormatError: If the data matches none of the layouts
        """
        try:
            if isinstance(data, dict) and isinstance(data.get("documents"), list):
                records = data["documents"]
                return cls(Document.from_dict(record) for record in records)
            if isinstance(data, list):
                return cls(Document.from_dict(record) for record in data)
            if (isinstance(data, dict) and "metadata" not in data
                    and all(isinstance(table, dict) for table in data.values())):
                return cls(Document(path, table) for path, table in data.items())
        except (TypeError, ValueError) as e:
            raise CorpusFormatError(f"Invalid document record: {e}") from e
        raise CorpusFormatError(f"Unrecognized corpus layout ({type(data).__name__})")

    def persist(self) -> bytes:
        """Serialize the corpus to UTF-8 encoded JSON"""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2).encode("utf-8")

    @classmethod
    def load(cls, blob) -> 'Corpus':
        """
        Deserialize a corpus produced by persist().

        Args:
            blob: JSON as bytes or str

        Returns:
            An equivalent Corpus

        Raises:
            CorpusFormatError: If the blob is not valid corpus JSON
        """
        try:
            data = json.loads(blob)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CorpusFormatError(f"Invalid JSON: {e}") from e
        return cls.from_dict(data)

    def save_to_json(self, output_file: str):
        """
        Save the corpus to a JSON file.

        Args:
            output_file: Path to output JSON file
        """
        print(f"Saving {output_file}...")
        content = self.persist()
        with open(output_file, "wb") as f:
            f.write(content)
        print(f"Corpus saved to {output_file}")

    @classmethod
    def load_from_json(cls, index_file: str) -> 'Corpus':
        """
        Load a corpus from a JSON file.

        Raises:
            OSError: If the file cannot be read
            CorpusFormatError: If the file content is not a valid corpus
        """
        with open(index_file, "rb") as f:
            content = f.read()
        try:
            return cls.load(content)
        except CorpusFormatError as e:
            raise CorpusFormatError(f"Could not load {index_file}: {e}") from e
