#!/usr/bin/env python3
"""Upload a local file into a collection straight through the client.

Usage: python test_scripts/upload_test_file.py <collection_name> <file> [--overwrite]
"""
import base64
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from docsearch.api.models import AutoContent
from docsearch.documents import get_document_client
from docsearch.errors import DocumentServiceError
from docsearch.logging import init_logging

logger = init_logging()

def main():
    """Upload a file, then list the collection to show its index status."""
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    if len(args) != 2:
        print(__doc__)
        return 2

    collection_name, file_path = args
    overwrite = "--overwrite" in sys.argv
    source = Path(file_path)

    print(f"Uploading {source} to: {collection_name}/{source.name}")

    try:
        client = get_document_client()
        content = AutoContent(base64_data=base64.b64encode(source.read_bytes()).decode("ascii"))
        added = client.add_document(
            collection_name,
            source.name,
            content,
            metadata={"upload_source": "test_script"},
            overwrite=overwrite
        )
        print(f"✅ {added.message} (HTTP {added.status_code})")

        for document in client.list_documents(collection_name, path_prefix=source.name):
            status = document.index_status.value if document.index_status else "unknown"
            print(f"   {document.path}: {status}")

    except (DocumentServiceError, ValueError, OSError) as e:
        print(f"❌ Error: {e}")
        return 1

    return 0

if __name__ == "__main__":
    sys.exit(main())
