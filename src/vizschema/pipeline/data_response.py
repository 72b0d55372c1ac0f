from typing import Any, Dict, Iterable, List, Optional

from vizschema.canonical.schema import SchemaDescriptor
from vizschema.pipeline.projection import project_rows


def requested_field_names(fields: Optional[Iterable[Any]]) -> List[str]:
    """
    Accepts ["a", "b"] or [{"name": "a"}, {"name": "b"}].
    """
    names: List[str] = []
    for f in fields or []:
        if isinstance(f, dict):
            name = f.get("name")
        else:
            name = f
        if name is None or str(name) == "":
            raise ValueError(f"Requested field has no name: {f!r}")
        names.append(str(name))
    return names


def fallback_field(name: str) -> Dict[str, Any]:
    return {"name": name, "label": name, "dataType": "STRING"}


def requested_schema(
    schema: Optional[SchemaDescriptor],
    names: List[str],
) -> List[Dict[str, Any]]:
    """
    Schema entries for the requested names, in request order. Names the
    schema does not know get a plain STRING entry.
    """
    out: List[Dict[str, Any]] = []
    for name in names:
        resolved = schema.get(name) if schema is not None else None
        out.append(resolved.to_dict() if resolved is not None else fallback_field(name))
    return out


def build_data_response(
    documents: List[Any],
    names: List[str],
    schema: Optional[SchemaDescriptor],
) -> Dict[str, List]:
    """
    {schema, rows} for a data request. An empty document list is a valid
    answer and yields no rows.
    """
    return {
        "schema": requested_schema(schema, names),
        "rows": [row.to_dict() for row in project_rows(documents, names)],
    }
