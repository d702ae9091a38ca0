import argparse
import os
import time

from DocSeeker.create_default_config import load_config
from DocSeeker.preprocessing.document import build_document
from DocSeeker.preprocessing.extract import extract_text
from DocSeeker.tfidf_search.corpus import Corpus


def _normalize_extensions(extensions):
    if not extensions:
        return None
    return {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}


def build_from_directory(root, extractor=extract_text, follow_symlinks=False, extensions=None):
    """
    Walk a directory tree and index every regular file in it.

    Entries are visited in name order. Symbolic links are skipped unless
    follow_symlinks is set; followed directories are entered only once,
    so link cycles end.

    Args:
        root: Directory to index
        extractor: Callable returning the plain text of a file path
        follow_symlinks: Whether to follow symbolic links
        extensions: Optional list of file suffixes to index (all files if empty)

    Returns:
        Corpus of the indexed files, keyed by normalized path

    Raises:
        OSError: If a directory in the tree cannot be listed
    """
    documents = []
    visited = set()
    allowed = _normalize_extensions(extensions)

    def index_file(file_path):
        if allowed is not None and os.path.splitext(file_path)[1].lower() not in allowed:
            return
        print(f"Indexing {file_path}...")
        try:
            content = extractor(file_path)
        except (OSError, ValueError) as e:
            print(f"Warning: could not read {file_path}, skipping: {e}")
            return
        documents.append(build_document(file_path, content))

    def walk(directory):
        real_path = os.path.realpath(directory)
        if real_path in visited:
            print(f"Skipping already visited directory {directory}")
            return
        visited.add(real_path)

        print(f"Indexing directory {directory}...")
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)

        for entry in entries:
            entry_path = os.path.normpath(os.path.join(directory, entry.name))
            if entry.is_symlink() and not follow_symlinks:
                print(f"Skipping symbolic link {entry_path}")
                continue
            if entry.is_dir():
                walk(entry_path)
            elif entry.is_file():
                index_file(entry_path)
            else:
                print(f"Skipping {entry_path}: not a regular file")

    walk(os.path.normpath(root))
    return Corpus(documents)


class CorpusBuilder:
    def __init__(self, config=None):
        self.config = config or load_config()
        self.corpus = Corpus()

    def build_from_directory(self, root):
        """
        Build the corpus from a directory tree using the indexing settings.

        Args:
            root: Directory to index

        Returns:
            bool: True if successful, False otherwise
        """
        indexing = self.config.get("indexing", {})
        try:
            start_time = time.time()
            self.corpus = build_from_directory(
                root,
                follow_symlinks=indexing.get("follow_symlinks", False),
                extensions=indexing.get("extensions") or None
            )
            end_time = time.time()
            print(f"Indexed {len(self.corpus)} documents in {end_time - start_time:.2f} seconds")
            return True
        except OSError as e:
            print(f"Error: could not open directory {e.filename or root} for indexing: {e.strerror or e}")
            return False

    def save_to_json(self, output_file):
        self.corpus.save_to_json(output_file)

    def print_sample(self, sample_size=10):
        """Print the most frequent terms of the corpus"""
        print("\nCorpus Sample:")
        print("-" * 60)
        for term, count in self.corpus.top_terms(sample_size):
            print(f"'{term}' -> {count} occurrences in {self.corpus.document_frequency(term)} documents")
        print("-" * 60)


def main():
    parser = argparse.ArgumentParser(description='Build a term-frequency corpus from a directory')
    parser.add_argument('folder', help='Directory to index')
    parser.add_argument('--output', default='index.json',
                        help='Path to output corpus JSON file')
    parser.add_argument('--follow-symlinks', action='store_true',
                        help='Follow symbolic links while walking the directory')
    args = parser.parse_args()

    config = load_config()
    if args.follow_symlinks:
        config["indexing"]["follow_symlinks"] = True

    builder = CorpusBuilder(config=config)
    if not builder.build_from_directory(args.folder):
        print("Failed to build corpus!")
        raise SystemExit(1)

    builder.print_sample()
    builder.save_to_json(args.output)
    print("\nDone!")


if __name__ == "__main__":
    main()
