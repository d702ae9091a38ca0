import time
from collections import Counter
from typing import List, NamedTuple, Optional, Tuple

from ..preprocessing.lexer import tokenize
from .corpus import Corpus


class SearchResult(NamedTuple):
    path: str
    score: float


def search(corpus: Corpus, query: str, top_k: Optional[int] = None) -> List[SearchResult]:
    """
    Rank the documents of a corpus against a free-text query.

    score(d) = sum over query terms t of TF(t, d) * IDF(t)

    A term that appears several times in the query is counted each time.
    Documents scoring zero or less are dropped. Equal scores keep the
    corpus order.

    Args:
        corpus: Corpus to search
        query: Query string
        top_k: Maximum number of results to return (all if None)

    Returns:
        List of SearchResult tuples, best first
    """
    query_terms = Counter(tokenize(query))
    if not query_terms:
        return []

    # IDF depends only on the corpus, so compute it once per distinct term
    weights = {term: occurrences * corpus.inverse_document_frequency(term)
               for term, occurrences in query_terms.items()}

    results = []
    for document in corpus:
        score = sum(document.term_frequency(term) * weight for term, weight in weights.items())
        if score > 0:
            results.append(SearchResult(document.path, score))

    results.sort(key=lambda result: result.score, reverse=True)

    if top_k is not None:
        return results[:top_k]
    return results


class TFIDFSearchEngine:
    """TF-IDF search engine over a loaded corpus"""

    def __init__(self, corpus: Corpus):
        """
        Initialize the search engine.

        Args:
            corpus: Corpus to search; it is shared, never modified
        """
        self.corpus = corpus

    @classmethod
    def from_index_file(cls, index_file: str) -> 'TFIDFSearchEngine':
        print(f"Loading corpus from {index_file}...")
        corpus = Corpus.load_from_json(index_file)
        print(f"Loaded corpus with {len(corpus)} documents")
        return cls(corpus)

    def search(self, query: str, top_k: Optional[int] = None) -> Tuple[List[SearchResult], float]:
        """
        Search for documents matching the query.

        Args:
            query: Query string
            top_k: Number of top results to return

        Returns:
            Tuple of (results, execution time in seconds)
        """
        start_time = time.time()
        results = search(self.corpus, query, top_k=top_k)
        return results, time.time() - start_time
