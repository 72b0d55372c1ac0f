from typing import Any


def unwrap_document(doc: Any) -> Any:
    """
    Strip a single synthetic wrapper key.

    `SELECT * FROM airline` style queries return rows as
    {"airline": {...}}. When a document has exactly one key and its value
    is a non-null object, that object is the real document. Anything else
    is returned unchanged.
    """
    if isinstance(doc, dict) and len(doc) == 1:
        (value,) = doc.values()
        if isinstance(value, dict):
            return value
    return doc
