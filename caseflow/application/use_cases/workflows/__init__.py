from caseflow.application.use_cases.workflows.workflow_service import WorkflowService

__all__ = ["WorkflowService"]
