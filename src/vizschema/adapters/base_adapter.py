from typing import Dict

from vizschema.canonical.field import FieldObservation
from vizschema.canonical.schema import SchemaDescriptor
from vizschema.pipeline.schema_builder import build_schema


class InferenceAdapter:
    """
    Common contract for schema inference strategies.

    Subclasses only produce field observations; resolution into a
    SchemaDescriptor is shared so every strategy yields the same shape.
    """

    strategy = "UNKNOWN"

    def observe(self) -> Dict[str, FieldObservation]:
        raise NotImplementedError

    def parse(self) -> SchemaDescriptor:
        return build_schema(self.observe())
