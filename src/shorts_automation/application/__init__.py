"""Application layer – use cases and pipeline orchestration."""

from shorts_automation.application.pipeline import ShortsPipeline

__all__ = ["ShortsPipeline"]
