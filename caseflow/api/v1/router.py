"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. Routes get
their services from caseflow.api.v1.dependencies.
"""

from fastapi import APIRouter

from caseflow.api.v1.endpoints import health, workflow_instances

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(workflow_instances.router, tags=["workflow-instances"])
