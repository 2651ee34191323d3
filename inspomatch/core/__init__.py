# Path: inspomatch/core/__init__.py
# Purpose: Package initializer for core application layer.
# Layer: core.
# Details: Aggregates subpackages for scoring, embedders, analysis, vector stores, indexing, search, and models.
