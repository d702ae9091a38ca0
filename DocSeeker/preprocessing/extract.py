from html.parser import HTMLParser
from typing import List


class TextCollector(HTMLParser):
    """Collects the text nodes of an HTML/XML document, ignoring tags."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []

    def handle_data(self, data):
        text = data.strip()
        if text:
            self.parts.append(text)

    def text(self) -> str:
        return " ".join(self.parts)


def extract_markup_text(markup: str) -> str:
    collector = TextCollector()
    try:
        collector.feed(markup)
        collector.close()
    except AssertionError as e:
        # html.parser asserts on malformed declarations such as "<![foo["
        raise ValueError(f"could not parse markup: {e}") from e
    return collector.text()


def extract_text(file_path: str) -> str:
    """
    Read a markup file and return its text content.

    Any file is treated as markup. A plain text file has no tags, so it
    comes back as one trimmed text node.

    Args:
        file_path: Path to the file

    Returns:
        Text nodes of the file joined by single spaces

    Raises:
        OSError: If the file cannot be read
        ValueError: If the markup cannot be parsed
    """
    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        content = f.read()
    return extract_markup_text(content)
