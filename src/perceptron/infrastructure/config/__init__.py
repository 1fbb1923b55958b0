"""Configuration infrastructure."""

from .config_loader import ConfigLoader, DataConfig, LayerConfigModel

__all__ = ['ConfigLoader', 'DataConfig', 'LayerConfigModel']
