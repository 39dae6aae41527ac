from .materializer import GeneratedTask, MaterializationResult, RecurRule, materialize
from .service import RecurrenceService

__all__ = [
    "GeneratedTask",
    "MaterializationResult",
    "RecurRule",
    "RecurrenceService",
    "materialize",
]
