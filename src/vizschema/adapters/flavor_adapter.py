from typing import Any, Dict, Optional

from vizschema.adapters.base_adapter import InferenceAdapter
from vizschema.canonical.field import FieldObservation, TypeTag
from vizschema.inference.aggregator import FieldObservationAggregator
from vizschema.inference.type_inference import classify_declared


class FlavorAdapter(InferenceAdapter):
    """
    Infers fields from one structural "flavor" description, as produced by
    a server-side INFER statement:

        {"properties": {"name": {"type": "string", "samples": [...]},
                        "geo": {"type": "object", "properties": {...}}}}

    Each declared property becomes one observation. Object properties with
    nested descriptions are walked with dotted paths; the parent path only
    emits a field when it also declares a non-object type.
    """

    strategy = "FLAVOR"

    def __init__(self, flavor: Optional[Dict[str, Any]]):
        self.flavor = flavor or {}

    def observe(self) -> Dict[str, FieldObservation]:
        aggregator = FieldObservationAggregator()
        properties = self.flavor.get("properties") if isinstance(self.flavor, dict) else None
        self._walk(aggregator, properties, prefix="")
        return aggregator.observations

    def _walk(self, aggregator: FieldObservationAggregator, properties: Any, prefix: str) -> None:
        if not isinstance(properties, dict):
            return

        for name, description in properties.items():
            path = f"{prefix}.{name}" if prefix else str(name)

            if not isinstance(description, dict):
                aggregator.record(path, TypeTag.STRING)
                continue

            tags = classify_declared(
                description.get("type"),
                description.get("samples"),
            )
            if not tags:
                tags = [TypeTag.STRING]

            for tag in tags:
                aggregator.record(path, tag)

            if TypeTag.OBJECT in tags:
                self._walk(aggregator, description.get("properties"), path)
