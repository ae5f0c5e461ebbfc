"""
JSON event file processing using streaming parser.
"""

import codecs
from typing import Any, Dict, List

import ijson


class TraceFileProcessor:
    """Processes span/transaction JSON files using streaming parser."""

    @staticmethod
    def detect_prefix(f) -> str:
        """
        Pick the ijson prefix for the file layout: a top-level array of
        documents, or an Elasticsearch search response.

        A UTF-8 byte order mark is skipped and the file is left positioned
        just after it, since the streaming parser does not accept one.

        Args:
            f: File opened in binary mode, positioned at the start

        Returns:
            'item' for an array, 'hits.hits.item' for a search response
        """
        start = len(codecs.BOM_UTF8) if f.read(len(codecs.BOM_UTF8)) == codecs.BOM_UTF8 else 0
        f.seek(start)

        first = f.read(1)
        while first and first.isspace():
            first = f.read(1)

        f.seek(start)
        if first == b'[':
            return 'item'
        return 'hits.hits.item'

    @staticmethod
    def process_file(file_path: str) -> List[Dict[str, Any]]:
        """
        Read all span and transaction documents from a JSON file.

        Args:
            file_path: Path to the JSON file

        Returns:
            Flat list of documents in file order
        """
        documents = []

        print(f"Processing {file_path}...")

        with open(file_path, 'rb') as f:
            prefix = TraceFileProcessor.detect_prefix(f)
            parser = ijson.items(f, prefix, use_float=True)

            for entry in parser:
                # search hits wrap the document in '_source'
                document = entry.get('_source', entry) if prefix != 'item' else entry
                documents.append(document)

                if len(documents) % 10000 == 0:
                    print(f"  Read {len(documents)} documents...")

        print(f"Completed reading file: {len(documents)} documents found.")

        return documents
