"""Pipeline orchestration for the worker/verifier workflow."""

from mathcheck.orchestration.pipeline import PipelineResult, PipelineState, VerificationPipeline

__all__ = ["VerificationPipeline", "PipelineResult", "PipelineState"]
