"""Utility functions and tools used across the slidefit package.

- `logger`: Logging configuration
- `globals`: Shared constants and default parameters
- `config`: YAML configuration file parsing
- `factory`: Generic factory pattern implementations
- `enums`: Enumerated types
- `cluster`: Cluster shape helpers (length, occupancy, width, sorting)
"""
