"""Model registry consumed by the schema-set builder.

Models are kept in registration order so ``definitions`` in the produced
document are reproducible.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional

from .core import ModelDef


class ModelRegistry:
    """Ordered collection of ``ModelDef`` keyed by model name."""

    def __init__(self, models: Optional[Iterable[ModelDef]] = None) -> None:
        self._models: Dict[str, ModelDef] = {}
        for model in models or ():
            self.register(model)

    def register(self, model: ModelDef) -> None:
        """Register a model definition."""
        if model.name in self._models:
            raise ValueError(
                f"Model '{model.name}' is already registered. "
                "Use a different name or build a new registry."
            )
        self._models[model.name] = model

    def get(self, name: str) -> ModelDef:
        """Retrieve a model definition by name."""
        if name not in self._models:
            available = list(self._models.keys())
            raise KeyError(f"Model '{name}' not found in registry. Available: {available}")
        return self._models[name]

    def list_models(self) -> List[str]:
        """List registered model names in registration order."""
        return list(self._models.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[ModelDef]:
        return iter(list(self._models.values()))

    def __len__(self) -> int:
        return len(self._models)


__all__ = ["ModelRegistry"]
