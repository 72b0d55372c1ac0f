from typing import Any, Iterable, List, Sequence

from vizschema.canonical.schema import ProjectedRow
from vizschema.pipeline.unwrap import unwrap_document


def read_path(document: Any, field_path: str) -> Any:
    """
    Read a dotted path from a document. Missing segments give None.
    """
    value = document
    for segment in field_path.split("."):
        if not isinstance(value, dict) or segment not in value:
            return None
        value = value[segment]
    return value


def project_row(doc: Any, requested_fields: Sequence[str]) -> ProjectedRow:
    """
    Project one raw document onto the requested fields, in the order
    requested. Values are read as-is; absent fields become None.
    """
    document = unwrap_document(doc)
    return ProjectedRow(values=[read_path(document, name) for name in requested_fields])


def project_rows(
    docs: Iterable[Any],
    requested_fields: Sequence[str],
) -> List[ProjectedRow]:
    fields = list(requested_fields)
    return [project_row(doc, fields) for doc in docs]
