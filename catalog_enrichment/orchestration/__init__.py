"""
Platform update orchestration.

Modules:
    plan         - Ordered update plan for one product event
    orchestrator - Step-by-step execution with per-step outcomes
"""

from .orchestrator import DEADLINE_EXCEEDED, UpdateOrchestrator
from .plan import build_update_plan

__all__ = ['DEADLINE_EXCEEDED', 'UpdateOrchestrator', 'build_update_plan']
