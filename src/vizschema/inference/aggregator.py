from typing import Any, Dict, Iterable

from vizschema.canonical.field import FieldObservation, TypeTag
from vizschema.inference.type_inference import classify


class FieldObservationAggregator:
    """
    Collects per-path type observations across documents.

    Paths keep the position of their first sighting; later sightings only
    add types. Nested objects are walked with dotted prefixes, arrays and
    primitives are leaves.
    """

    def __init__(self):
        self._observations: Dict[str, FieldObservation] = {}

    @property
    def observations(self) -> Dict[str, FieldObservation]:
        return dict(self._observations)

    def record(self, path: str, tag: TypeTag) -> FieldObservation:
        observation = self._observations.get(path)
        if observation is None:
            observation = FieldObservation(path=path)
            self._observations[path] = observation
        observation.record(tag)
        return observation

    def observe(self, document: Any, prefix: str = "") -> None:
        if not isinstance(document, dict):
            return

        # Explicit stack; deep documents must not reach the recursion limit
        stack = [(prefix, iter(document.items()))]
        while stack:
            parent, items = stack[-1]
            try:
                key, value = next(items)
            except StopIteration:
                stack.pop()
                continue

            path = f"{parent}.{key}" if parent else str(key)
            tag = classify(value)
            self.record(path, tag)

            if tag is TypeTag.OBJECT:
                stack.append((path, iter(value.items())))

    def observe_all(self, documents: Iterable[Any]) -> Dict[str, FieldObservation]:
        for document in documents:
            self.observe(document)
        return self.observations


def aggregate(documents: Iterable[Any]) -> Dict[str, FieldObservation]:
    """
    Walk every document in order and return the observations keyed by
    field path, in first-seen order.
    """
    return FieldObservationAggregator().observe_all(documents)
