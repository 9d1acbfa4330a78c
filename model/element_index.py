# model/element_index.py

"""
ModelElementIndex keeps the read-only element universe of every model
deployed during a run. The coverage engine asks it for the full set of
coverable elements of a model key to build ratio denominators; it never
mutates a definition once it is deployed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, Tuple

from utils.logger import get_logger
from .definition import ModelDefinition
from .exceptions import UnknownModel

logger = get_logger(__name__)


@dataclass(slots=True)
class ModelElementIndex:
    """
    Registry of deployed model definitions keyed by model key.

    Attributes:
      _models: Deployed definitions by key, in deployment order.
    """
    _models: Dict[str, ModelDefinition] = field(default_factory=dict)

    @classmethod
    def of(cls, models: Iterable[ModelDefinition]) -> ModelElementIndex:
        """Builds an index with every model in `models` already deployed."""
        index = cls()
        for model in models:
            index.deploy(model)
        return index

    def deploy(self, model: ModelDefinition) -> None:
        """
        Registers a deployed model.

        Redeploying identical content under the same key is accepted silently.
        Different content under an existing key is rejected, since a deployed
        definition must not change for the rest of the run.

        Args:
            model: The definition to register.

        Raises:
            ValueError: If `model.key` is already deployed with other content.
        """
        existing = self._models.get(model.key)
        if existing is not None:
            if existing != model:
                raise ValueError(f"Model '{model.key}' is already deployed with different content")
            return
        self._models[model.key] = model
        logger.debug(f"Deployed model {model}")

    def definition(self, model_key: str) -> ModelDefinition:
        """Returns the deployed definition for `model_key` or raises UnknownModel."""
        try:
            return self._models[model_key]
        except KeyError:
            raise UnknownModel(model_key) from None

    def elements_of(self, model_key: str) -> FrozenSet[str]:
        """
        Returns every coverable element id declared by the model.

        Deterministic for the lifetime of the index.

        Raises:
            UnknownModel: If `model_key` was never deployed.
        """
        return self.definition(model_key).element_set

    def ordered_elements_of(self, model_key: str) -> Tuple[str, ...]:
        """Like `elements_of`, in declaration order."""
        return self.definition(model_key).elements

    def keys(self) -> Tuple[str, ...]:
        """Deployed model keys in deployment order."""
        return tuple(self._models)

    def __contains__(self, model_key: object) -> bool:
        return model_key in self._models

    def __iter__(self) -> Iterator[ModelDefinition]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)
