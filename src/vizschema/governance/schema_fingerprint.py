import hashlib
import json
from typing import Dict, List

from vizschema.canonical.schema import SchemaDescriptor


# --------------------------------------------------
# SCHEMA HASHING (ORDER-SENSITIVE, STRUCTURAL)
# --------------------------------------------------

def normalize_schema_for_hash(schema: SchemaDescriptor) -> List[Dict]:
    """
    Structural view of a schema. Field order is part of the structure
    because rows are projected positionally.
    """
    return [
        {
            "name": f.name,
            "type": f.data_type.value,
            "concept": f.concept_role.value,
        }
        for f in schema
    ]


def compute_schema_hash(schema: SchemaDescriptor) -> str:
    payload = json.dumps(normalize_schema_for_hash(schema), sort_keys=True)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


# --------------------------------------------------
# SCHEMA DIFF
# --------------------------------------------------

def diff_schemas(old: SchemaDescriptor, new: SchemaDescriptor) -> Dict[str, List]:
    """
    Compare two schemas by field name.

    Returns added/removed field names and fields whose data type or
    concept role changed.
    """
    old_names = set(old.names)
    new_names = set(new.names)

    modified = []
    for f in new:
        previous = old.get(f.name)
        if previous is None:
            continue
        if (previous.data_type, previous.concept_role) != (f.data_type, f.concept_role):
            modified.append({
                "name": f.name,
                "old_type": previous.data_type.value,
                "new_type": f.data_type.value,
                "old_concept": previous.concept_role.value,
                "new_concept": f.concept_role.value,
            })

    return {
        "added_fields": [n for n in new.names if n not in old_names],
        "removed_fields": [n for n in old.names if n not in new_names],
        "modified_fields": modified,
    }
