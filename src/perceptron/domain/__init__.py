"""Domain layer - Core network logic and entities.

This package contains the training/inference engine, free from any
storage or configuration concerns. It defines:

- Business entities (layer and training configurations, model snapshots)
- The layer and perceptron models
- Repository interfaces for model persistence
- Service interfaces for training orchestration
"""
