"""Multi-layer perceptron trained by online backpropagation.

The package follows a layered layout:

- domain: layer configurations, the layer/network engine and the
  repository and service interfaces
- infrastructure: YAML configuration, JSON model persistence,
  training data loading and dependency wiring
- application: the concrete training service used by the entry point
"""

__version__ = "1.0.0"
