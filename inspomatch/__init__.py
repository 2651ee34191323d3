# Path: inspomatch/__init__.py
# Purpose: Package initializer for the inspiration matching service.
# Layer: root.
# Details: Subpackages cover configuration, the core matching engine, and the HTTP API.

__version__ = "0.1.0"
