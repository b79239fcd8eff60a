"""Component classification into the atoms/molecules/organisms/layout taxonomy."""

from .classifier import (
    ClassificationError,
    ClassificationRule,
    ComponentClassifier,
    default_rules,
)
from .signals import (
    ComponentSignals,
    DesignSignalExtractor,
    ImplementationSignalExtractor,
    SignalExtractor,
)
from .taxonomy import TAXONOMY, is_valid_subtype

__all__ = [
    "ClassificationError",
    "ClassificationRule",
    "ComponentClassifier",
    "default_rules",
    "ComponentSignals",
    "DesignSignalExtractor",
    "ImplementationSignalExtractor",
    "SignalExtractor",
    "TAXONOMY",
    "is_valid_subtype",
]
