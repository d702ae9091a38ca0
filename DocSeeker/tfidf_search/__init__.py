"""
TF-IDF search module for ranking indexed documents against free-text queries.
Holds the corpus (term statistics and persistence) and the ranker.
"""
