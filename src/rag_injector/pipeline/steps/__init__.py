"""Steps of the injection pipeline, in run order."""

from .history import HistoryRepairStep
from .lore import LoreReconcileStep, LoreScanStep
from .retrieval import RetrievalStep
from .injection import InjectionStep
from .finish import FinishStep

__all__ = [
    "FinishStep",
    "HistoryRepairStep",
    "InjectionStep",
    "LoreReconcileStep",
    "LoreScanStep",
    "RetrievalStep",
    "default_steps",
]


def default_steps() -> list:
    return [
        HistoryRepairStep(),
        LoreScanStep(),
        RetrievalStep(),
        InjectionStep(),
        LoreReconcileStep(),
        FinishStep(),
    ]
