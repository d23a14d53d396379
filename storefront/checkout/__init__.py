# Purchase submission

from .orchestrator import PurchaseOrchestrator
from .confirmation import PurchaseConfirmation

__all__ = ["PurchaseOrchestrator", "PurchaseConfirmation"]
