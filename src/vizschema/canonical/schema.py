from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from vizschema.canonical.field import ResolvedField


@dataclass(frozen=True)
class SchemaDescriptor:
    """
    Ordered, duplicate-free list of resolved fields.

    Field order is the order in which each path was first observed.
    """
    fields: Sequence[ResolvedField]

    def __post_init__(self):
        names = [f.name for f in self.fields]
        if len(names) != len(set(names)):
            duplicates = sorted({n for n in names if names.count(n) > 1})
            raise ValueError(f"Duplicate field names in schema: {duplicates}")
        object.__setattr__(self, "fields", tuple(self.fields))

    def __iter__(self) -> Iterator[ResolvedField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def get(self, name: str) -> Optional[ResolvedField]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def to_dict(self) -> List[Dict[str, Any]]:
        return [f.to_dict() for f in self.fields]


@dataclass
class ProjectedRow:
    """
    Values aligned 1:1 with a caller-supplied list of field names.
    """
    values: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[Any]]:
        return {"values": self.values}


def schema_from_dict(fields: List[Dict[str, Any]]) -> SchemaDescriptor:
    return SchemaDescriptor(fields=[ResolvedField.from_dict(f) for f in fields or []])
