import numpy as np
import os
import datetime
from typing import List, Optional, Sequence

from engine.config import NetworkConfig
from layers.base import BackpropTrain, Compute, SupervisedTrain
from layers.dense import Dense
from layers.initializers import constant, get_initializer
from training import GradientDescent, PerceptronRule, get_rule


class Model(Compute, SupervisedTrain, BackpropTrain):
    """Chain of dense layers trained by backpropagation

    The only information passed backwards between layers is the vector each
    layer's ``backprop_train`` returns, which becomes the target of the layer
    before it.
    """

    def __init__(self, config: NetworkConfig, layers: Optional[List[Dense]] = None):
        self.config = config
        self.rule = get_rule(config.rule, config.learning_rate)

        if layers is None:
            layers = self._build_layers(config)
        if not layers:
            raise ValueError("A model needs at least one layer")
        self.layers = list(layers)

        for previous, layer in zip(self.layers, self.layers[1:]):
            if layer.input_size != previous.output_size:
                raise ValueError(f"{layer!r} cannot follow {previous!r}: expected "
                                 f"{previous.output_size} inputs, got {layer.input_size}")

        # Training history
        self.loss_history = []
        self.step_count = 0

        if config.log_file:
            log_dir = os.path.dirname(os.path.abspath(config.log_file))
            os.makedirs(log_dir, exist_ok=True)

        self._log_training(f"Built network {' → '.join(str(s) for s in self.layer_sizes)} "
                           f"with {self.rule!r}")

    @classmethod
    def from_layers(cls, layers: Sequence[Dense], **kwargs) -> 'Model':
        """Wrap existing layers

        Layer sizes come from the layers themselves; ``kwargs`` set the other
        config fields (rule, learning rate, logging).
        """
        layers = list(layers)
        if not layers:
            raise ValueError("A model needs at least one layer")
        sized = sorted(set(kwargs) & {'input_size', 'hidden_sizes', 'output_size'})
        if sized:
            raise ValueError(f"Layer sizes are taken from the layers, got {', '.join(sized)}")
        config = NetworkConfig(
            input_size=layers[0].input_size,
            hidden_sizes=[layer.output_size for layer in layers[:-1]],
            output_size=layers[-1].output_size,
            **kwargs
        )
        return cls(config, layers)

    @staticmethod
    def _build_layers(config: NetworkConfig) -> List[Dense]:
        sizes = config.layer_sizes
        layers = []

        # counter and constant sequences run on across layers, weights then biases
        shared = None
        if config.weight_init in ('counter', 'constant'):
            shared = get_initializer(config.weight_init, value=config.init_value)

        for i in range(len(sizes) - 1):
            if shared is not None:
                layer = Dense.from_generator(sizes[i], sizes[i + 1], config.activation,
                                             shared, dtype=config.dtype)
            else:
                seed = None if config.seed is None else config.seed + i
                weights = get_initializer(config.weight_init, sizes[i], sizes[i + 1], seed)
                layer = Dense.from_generators(sizes[i], sizes[i + 1], config.activation,
                                              weights, constant(0.0), dtype=config.dtype)
            layers.append(layer)

        return layers

    @property
    def input_size(self) -> int:
        return self.layers[0].input_size

    @property
    def output_size(self) -> int:
        return self.layers[-1].output_size

    @property
    def layer_sizes(self) -> List[int]:
        return [self.input_size] + [layer.output_size for layer in self.layers]

    def compute(self, input: Sequence[float]) -> np.ndarray:
        """Forward pass through the network"""
        A = input
        for layer in self.layers:
            A = layer.compute(A)
        return np.asarray(A)

    def forward(self, input: Sequence[float]) -> np.ndarray:
        return self.compute(input)

    def backprop_train(self, rule, input: Sequence[float], target: Sequence[float]) -> np.ndarray:
        """Backpropagate through every layer, last one first"""
        # inputs of every layer, taken before any weight changes
        inputs = [input]
        for layer in self.layers[:-1]:
            inputs.append(layer.compute(inputs[-1]))

        error = target
        for layer, layer_input in zip(reversed(self.layers), reversed(inputs)):
            error = layer.backprop_train(rule, layer_input, error)
        return error

    def supervised_train(self, rule, input: Sequence[float], target: Sequence[float]) -> None:
        """One training step on a single example"""
        if isinstance(rule, GradientDescent):
            self.backprop_train(rule, input, target)
        elif isinstance(rule, PerceptronRule):
            if len(self.layers) != 1:
                raise ValueError("The perceptron rule only trains single-layer models")
            self.layers[0].supervised_train(rule, input, target)
        else:
            raise TypeError(f"Unsupported training rule: {rule!r}")

        self.step_count += 1
        if self.step_count % self.config.log_interval == 0:
            loss = self.compute_loss(input, target)
            self.loss_history.append(loss)
            self._log_training(f"Step {self.step_count}: Loss = {loss:.6f}")

    def train_step(self, input: Sequence[float], target: Sequence[float]) -> None:
        """Training step with the configured rule"""
        self.supervised_train(self.rule, input, target)

    def compute_loss(self, input: Sequence[float], target: Sequence[float]) -> float:
        """Mean squared error, missing target components count as zero"""
        output = self.compute(input)
        if output.shape[0] == 0:
            return 0.0
        t = np.asarray(target, dtype=output.dtype).reshape(-1)[:output.shape[0]]
        padded = np.zeros_like(output)
        padded[:t.shape[0]] = t
        return float(np.mean((output - padded) ** 2))

    def __len__(self) -> int:
        return len(self.layers)

    def __getitem__(self, index: int) -> Dense:
        return self.layers[index]

    def __iter__(self):
        return iter(self.layers)

    def __str__(self) -> str:
        desc = ["Neural Network:"]
        for layer in self.layers:
            desc.append(f"  {layer!r}")
        return "\n".join(desc)

    def _log_training(self, message: str) -> None:
        """Log training progress"""
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        log_message = f"[{timestamp}] {message}"

        if self.config.verbose:
            print(log_message)
        if self.config.log_file:
            with open(self.config.log_file, 'a', encoding='utf-8') as f:
                f.write(log_message + '\n')
