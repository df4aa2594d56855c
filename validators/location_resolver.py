"""
location_resolver.py

Maps XPath location paths reported by a Schematron processor back to line
and column positions in the validated source document.

Each source document is parsed once per run with lxml for XPath evaluation;
element start positions are recorded in the same pass order with expat,
since lxml only tracks line numbers.
"""

import os
import re
import sys
from typing import Callable, Dict, List, Optional, Tuple
from xml.parsers import expat

from lxml import etree

from core.settings import NAMESPACES, TEI_NS

# Q{namespace-uri}local-name
CLARK_NAME = re.compile(r"Q\{([^}]*)\}")

Position = Tuple[int, int]


def rewrite_clark_names(expression: str, prefixes: Optional[Dict[str, str]] = None) -> str:
    """
    Replace Clark-notation namespace qualifiers with bound prefixes.

    Only namespace URIs listed in `prefixes` are rewritten, so
    Q{http://www.tei-c.org/ns/1.0}body becomes tei:body by default.

    Args:
        expression: XPath expression
        prefixes: namespace URI -> prefix (default: TEI only)

    Returns:
        Rewritten expression
    """
    if prefixes is None:
        prefixes = {TEI_NS: "tei"}
    for uri, prefix in prefixes.items():
        expression = expression.replace(f"Q{{{uri}}}", f"{prefix}:")
    return expression


def _element_positions(data: bytes) -> List[Position]:
    """Start-tag positions (1-based line and column) of all elements in document order."""
    # the bytes are always UTF-8 here, whatever the declaration says
    parser = expat.ParserCreate("utf-8")
    positions: List[Position] = []

    def start_element(name, attrs):
        positions.append((parser.CurrentLineNumber, parser.CurrentColumnNumber + 1))

    parser.StartElementHandler = start_element
    parser.Parse(data, True)
    return positions


class PositionedDocument:
    """A parsed source document with the start position of every element."""

    def __init__(self, path: str, tree, positions: Dict):
        self.path = path
        self.tree = tree
        self._positions = positions

    def select_nodes(self, expression: str, namespaces: Dict[str, str]) -> list:
        """Evaluate an XPath expression; non node-set results give an empty list."""
        result = self.tree.xpath(expression, namespaces=namespaces)
        if isinstance(result, list):
            return result
        return []

    def position_of(self, node) -> Position:
        # attribute and text results are positioned at their element
        if isinstance(node, etree._ElementUnicodeResult):
            node = node.getparent()
        if node is None:
            return 0, 0
        if node in self._positions:
            return self._positions[node]
        sourceline = getattr(node, "sourceline", None)
        return (sourceline or 0), 0


def load_positioned_document(path: str) -> PositionedDocument:
    """
    Read and parse a source document.

    Raises:
        OSError: If the file cannot be read
        lxml.etree.XMLSyntaxError: If the document is not well-formed
    """
    # undecodable bytes are replaced rather than rejected
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        data = f.read().encode("utf-8")

    parser = etree.XMLParser(encoding="utf-8", huge_tree=True)
    root = etree.fromstring(data, parser)
    tree = root.getroottree()

    elements = list(tree.iter(etree.Element))
    positions = dict(zip(elements, _element_positions(data)))
    return PositionedDocument(path, tree, positions)


class DocumentCache:
    """
    Parsed source documents keyed by absolute path.

    Entries are added on first use and kept for the lifetime of the cache,
    which is one validation run.
    """

    def __init__(self, loader: Optional[Callable[[str], PositionedDocument]] = None):
        self._loader = loader or load_positioned_document
        self._documents: Dict[str, PositionedDocument] = {}

    def get(self, path: str) -> PositionedDocument:
        key = os.path.abspath(path)
        document = self._documents.get(key)
        if document is None:
            document = self._loader(key)
            self._documents[key] = document
        return document

    def __contains__(self, path: str) -> bool:
        return os.path.abspath(path) in self._documents

    def __len__(self) -> int:
        return len(self._documents)


class LocationResolver:
    """Resolves location paths to (line, column) in cached source documents."""

    def __init__(
        self,
        cache: Optional[DocumentCache] = None,
        namespaces: Optional[Dict[str, str]] = None,
    ):
        self.cache = cache if cache is not None else DocumentCache()
        self.namespaces = dict(namespaces or NAMESPACES)

    def _prepare(self, location: str) -> Tuple[str, Dict[str, str]]:
        """Rewrite Clark names to prefixes, binding a prefix for unknown namespaces."""
        namespaces = dict(self.namespaces)
        prefixes = {uri: prefix for prefix, uri in namespaces.items()}
        expression = rewrite_clark_names(location, prefixes)

        def bind(match):
            uri = match.group(1)
            if not uri:
                return ""
            if uri not in prefixes:
                prefix = f"ns{len(prefixes)}"
                prefixes[uri] = prefix
                namespaces[prefix] = uri
            return f"{prefixes[uri]}:"

        return CLARK_NAME.sub(bind, expression), namespaces

    def resolve(self, document_path: str, location: str) -> Position:
        """
        Resolve a location path in a document.

        Args:
            document_path: Source document path
            location: Absolute XPath location path

        Returns:
            (line, column) of the first matching node, (0, 0) when nothing matches

        Raises:
            OSError, lxml.etree.XMLSyntaxError: If the document cannot be loaded
        """
        document = self.cache.get(document_path)
        expression, namespaces = self._prepare(location)
        try:
            nodes = document.select_nodes(expression, namespaces)
        except etree.XPathError as e:
            print(
                f"⚠️ Warning: cannot evaluate location {location!r} in {document_path}: {e}",
                file=sys.stderr,
            )
            return 0, 0
        if not nodes:
            return 0, 0
        return document.position_of(nodes[0])
