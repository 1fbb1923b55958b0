"""Versioned schema of the persisted model file.

Decoding goes through these pydantic models so that structural problems
(missing fields, wrong array rank, weights that do not fit the declared
layer, an inconsistent layer chain) are rejected instead of tolerated.
"""
from datetime import timedelta
from typing import List, Literal, Optional

import torch
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictFloat, StrictInt, model_validator

from perceptron.domain.entities.layer_config import ACTIVATIONS, LayerConfig
from perceptron.domain.entities.model_snapshot import LayerParameters, ModelSnapshot
from perceptron.domain.models.layer import DTYPE

FORMAT_VERSION = 1


class LayerConfigSchema(BaseModel):
    """Serialized form of a LayerConfig."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    inputs: StrictInt = Field(gt=0)
    outputs: StrictInt = Field(gt=0)
    activation: str
    learning_rate: StrictFloat = Field(gt=0, alias='learningRate')
    init_scale: StrictFloat = Field(gt=0, alias='initScale')
    seed: Optional[StrictInt] = None

    @model_validator(mode='after')
    def _check_activation(self) -> 'LayerConfigSchema':
        if self.activation not in ACTIVATIONS:
            raise ValueError(f"unknown activation '{self.activation}'")
        return self

    @classmethod
    def from_entity(cls, config: LayerConfig) -> 'LayerConfigSchema':
        return cls(
            inputs=config.inputs,
            outputs=config.outputs,
            activation=config.activation,
            learning_rate=float(config.learning_rate),
            init_scale=float(config.init_scale),
            seed=config.seed
        )

    def to_entity(self) -> LayerConfig:
        return LayerConfig(
            inputs=self.inputs,
            outputs=self.outputs,
            activation=self.activation,
            learning_rate=self.learning_rate,
            init_scale=self.init_scale,
            seed=self.seed
        )


class LayerParametersSchema(BaseModel):
    """One layer entry: its config and its (outputs x inputs+1) weights."""
    model_config = ConfigDict(extra='forbid')

    config: LayerConfigSchema
    weights: List[List[StrictFloat]]

    @model_validator(mode='after')
    def _check_weight_shape(self) -> 'LayerParametersSchema':
        rows, columns = self.config.outputs, self.config.inputs + 1
        if len(self.weights) != rows or any(len(row) != columns for row in self.weights):
            raise ValueError(f"weights must have shape ({rows}, {columns})")
        return self


class ModelSchema(BaseModel):
    """Top-level persisted model document."""
    model_config = ConfigDict(extra='forbid', populate_by_name=True)

    format_version: Literal[1] = Field(default=FORMAT_VERSION, alias='formatVersion')
    last_error: StrictFloat = Field(alias='lastError')
    # Seconds; older files call the field lastTime
    last_learning_time: StrictFloat = Field(
        ge=0,
        validation_alias=AliasChoices('lastLearningTime', 'lastTime'),
        serialization_alias='lastLearningTime'
    )
    parameters: List[LayerParametersSchema] = Field(min_length=1)

    @model_validator(mode='after')
    def _check_layer_chain(self) -> 'ModelSchema':
        for index in range(1, len(self.parameters)):
            expected = self.parameters[index - 1].config.outputs
            actual = self.parameters[index].config.inputs
            if actual != expected:
                raise ValueError(f"layer {index} expects {actual} inputs but previous layer has {expected} outputs")
        return self

    @classmethod
    def from_snapshot(cls, snapshot: ModelSnapshot) -> 'ModelSchema':
        return cls(
            format_version=FORMAT_VERSION,
            last_error=float(snapshot.last_error),
            last_learning_time=snapshot.last_learning_time.total_seconds(),
            parameters=[
                LayerParametersSchema(
                    config=LayerConfigSchema.from_entity(p.config),
                    weights=p.weights.tolist()
                )
                for p in snapshot.parameters
            ]
        )

    def to_snapshot(self) -> ModelSnapshot:
        return ModelSnapshot(
            last_error=self.last_error,
            last_learning_time=timedelta(seconds=self.last_learning_time),
            parameters=[
                LayerParameters(config=p.config.to_entity(), weights=torch.tensor(p.weights, dtype=DTYPE))
                for p in self.parameters
            ]
        )
