# Path: inspomatch/core/search/__init__.py
# Purpose: Package initializer for inspiration search orchestration.
# Layer: core/search.
# Details: Exposes the search pipeline and its helper functions.

from .pipeline import InspirationSearchPipeline, build_enriched_context, location_to_filter, score_candidate

__all__ = ["InspirationSearchPipeline", "build_enriched_context", "location_to_filter", "score_candidate"]
