"""Attach download links to document records by approximate filename matching."""

from typing import List, Optional

from .schemas import NOT_AVAILABLE, DocumentLinkRecord, DocumentRecord


def find_link(document: DocumentRecord, links: List[DocumentLinkRecord]) -> Optional[DocumentLinkRecord]:
    """First link whose text contains the filename, or is contained in it."""
    for link in links:
        if document.file_name in link.text or link.text in document.file_name:
            return link
    return None


def reconcile(documents: List[DocumentRecord], links: List[DocumentLinkRecord]) -> List[DocumentRecord]:
    """Return copies of ``documents`` with ``download_url`` filled in.

    The two lists come from separate extraction passes and share no key, so
    matching is by bidirectional substring containment; first match wins and
    unmatched documents get the "not available" sentinel.
    """
    resolved = []
    for doc in documents:
        link = find_link(doc, links)
        url = link.url if link and link.url else NOT_AVAILABLE
        resolved.append(doc.model_copy(update={"download_url": url}))
    return resolved
