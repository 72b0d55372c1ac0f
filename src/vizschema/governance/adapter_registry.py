from vizschema.adapters.flavor_adapter import FlavorAdapter
from vizschema.adapters.sampling_adapter import FirstRowAdapter, SamplingAdapter


class AdapterRegistry:
    """
    Maps inference strategy names to adapter implementations.
    """

    _REGISTRY = {
        "SAMPLING": SamplingAdapter,
        "FIRST_ROW": FirstRowAdapter,
        "FLAVOR": FlavorAdapter,
        "INFER": FlavorAdapter,
    }

    @classmethod
    def get_adapter(cls, strategy: str):
        if not strategy:
            raise ValueError("Strategy name must not be empty")

        key = strategy.upper()

        if key not in cls._REGISTRY:
            raise ValueError(
                f"No adapter registered for strategy: {strategy}"
            )

        return cls._REGISTRY[key]

    @classmethod
    def strategies(cls):
        return sorted(cls._REGISTRY)
