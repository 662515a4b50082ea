from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, List, Optional

ACTIVATIONS = ('identity', 'step', 'sigmoid', 'tanh', 'relu', 'leaky_relu', 'elu', 'gelu')
RULES = ('perceptron', 'gradient_descent', 'sgd')
INITIALIZERS = ('zeros', 'constant', 'counter', 'uniform', 'he', 'xavier')
DTYPES = ('float32', 'float64')


@dataclass
class NetworkConfig:
    """Configuration for building and training a chain of dense layers"""
    input_size: int = 4
    hidden_sizes: List[int] = None
    output_size: int = 2
    activation: str = 'sigmoid'
    rule: str = 'gradient_descent'
    learning_rate: float = 0.5
    weight_init: str = 'xavier'
    init_value: float = 0.0
    seed: Optional[int] = None
    dtype: str = 'float64'
    verbose: bool = False
    log_interval: int = 100
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.hidden_sizes is None:
            self.hidden_sizes = []
        self.hidden_sizes = list(self.hidden_sizes)

        sizes = [self.input_size] + self.hidden_sizes + [self.output_size]
        if any(size < 0 for size in sizes):
            raise ValueError(f"Layer sizes must be non-negative, got {sizes}")
        if self.learning_rate <= 0:
            raise ValueError(f"Learning rate must be positive, got {self.learning_rate}")
        if self.log_interval < 1:
            raise ValueError(f"Log interval must be at least 1, got {self.log_interval}")
        if self.activation not in ACTIVATIONS:
            raise ValueError(f"Unknown activation function: {self.activation}")
        if self.rule not in RULES:
            raise ValueError(f"Unknown training rule: {self.rule}")
        if self.weight_init not in INITIALIZERS:
            raise ValueError(f"Unknown initializer: {self.weight_init}")
        if self.dtype not in DTYPES:
            raise ValueError(f"Unsupported dtype: {self.dtype}")

    @property
    def layer_sizes(self) -> List[int]:
        return [self.input_size] + self.hidden_sizes + [self.output_size]

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'NetworkConfig':
        """Build a config from a mapping, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
