from typing import Any, Dict, List, Optional

from vizschema.adapters.base_adapter import InferenceAdapter
from vizschema.canonical.field import FieldObservation
from vizschema.inference.aggregator import FieldObservationAggregator
from vizschema.pipeline.unwrap import unwrap_document

DEFAULT_SAMPLE_SIZE = 100


class SamplingAdapter(InferenceAdapter):
    """
    Infers fields by inspecting raw result documents.

    Supports:
    - Full sample scan (default, up to sample_size documents)
    - First-row-only scan (faster, may miss sparse fields)
    - Wrapped rows ({"alias": {...}}) via unwrapping
    """

    strategy = "SAMPLING"

    def __init__(
        self,
        documents: List[Any],
        sample_size: Optional[int] = DEFAULT_SAMPLE_SIZE,
        first_row_only: bool = False,
    ):
        if sample_size is not None and sample_size <= 0:
            raise ValueError("sample_size must be a positive integer")

        self.documents = list(documents or [])
        self.sample_size = sample_size
        self.first_row_only = first_row_only

    # ==================================================
    # SAMPLE SELECTION
    # ==================================================

    def sample(self) -> List[Any]:
        if self.first_row_only:
            return self.documents[:1]
        if self.sample_size is None:
            return list(self.documents)
        return self.documents[: self.sample_size]

    # ==================================================
    # OBSERVATION
    # ==================================================

    def observe(self) -> Dict[str, FieldObservation]:
        aggregator = FieldObservationAggregator()
        for document in self.sample():
            aggregator.observe(unwrap_document(document))
        return aggregator.observations


class FirstRowAdapter(SamplingAdapter):
    """
    Sampling restricted to the first document of the result.
    """

    strategy = "FIRST_ROW"

    def __init__(self, documents: List[Any], sample_size: Optional[int] = None):
        super().__init__(documents, sample_size=sample_size, first_row_only=True)
