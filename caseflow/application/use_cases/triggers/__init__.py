from caseflow.application.use_cases.triggers.trigger_service import TriggerService

__all__ = ["TriggerService"]
