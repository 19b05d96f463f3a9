"""Workflow engine and its components."""

from repoflow.workflow.context import RepositoryContext, WorkflowOptions
from repoflow.workflow.engine import WorkflowEngine

__all__ = ["RepositoryContext", "WorkflowOptions", "WorkflowEngine"]
