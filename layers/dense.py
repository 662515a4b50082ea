import numpy as np
from typing import Callable, Sequence, Tuple, Union

from layers.activation import Activation, get_activation
from layers.base import BackpropTrain, Compute, SupervisedTrain
from training import GradientDescent, PerceptronRule


class Dense(Compute, SupervisedTrain, BackpropTrain):
    """Fully connected layer

    Every input is connected to every output. With ``X`` the input vector,
    ``W`` the weight matrix, ``B`` the biases and ``f`` the activation applied
    component-wise::

        Y = f(W*X + B)

    Weights are kept in a flat row-major buffer: the weight from input ``i``
    to output ``j`` lives at ``j*input_size + i``. Training fits ``W`` and
    ``B`` in place.

    Inputs shorter than ``input_size`` only sum the components they have and
    longer inputs are truncated. Targets shorter than ``output_size`` are
    padded with zeros and longer ones truncated.

    ``weights`` and ``biases`` are read-only views; replace them through
    ``set_weights`` and ``set_biases``, which check their lengths.
    """

    def __init__(self, input_size: int, output_size: int,
                 activation: Union[Activation, str] = 'identity',
                 dtype=np.float64):
        if input_size < 0 or output_size < 0:
            raise ValueError(f"Layer sizes must be non-negative, got {input_size} x {output_size}")

        self.dtype = np.dtype(dtype)
        if not np.issubdtype(self.dtype, np.floating):
            raise ValueError(f"Layer dtype must be a floating point type, got {self.dtype}")

        if isinstance(activation, str):
            activation = get_activation(activation)
        self.activation = activation

        self._input_size = int(input_size)
        self._weights = np.zeros(input_size * output_size, dtype=self.dtype)
        self._biases = np.zeros(output_size, dtype=self.dtype)

    @classmethod
    def from_generator(cls, input_size: int, output_size: int,
                       activation: Union[Activation, str],
                       generator: Callable[[], float], dtype=np.float64) -> 'Dense':
        """Weights then biases, each drawn by one call to ``generator``"""
        return cls.from_generators(input_size, output_size, activation,
                                   generator, generator, dtype=dtype)

    @classmethod
    def from_generators(cls, input_size: int, output_size: int,
                        activation: Union[Activation, str],
                        weight_generator: Callable[[], float],
                        bias_generator: Callable[[], float],
                        dtype=np.float64) -> 'Dense':
        """Weights drawn from ``weight_generator``, biases from ``bias_generator``"""
        layer = cls(input_size, output_size, activation, dtype=dtype)
        # weights are drawn in full before the first bias
        weights = [weight_generator() for _ in range(input_size * output_size)]
        biases = [bias_generator() for _ in range(output_size)]
        layer._weights = np.array(weights, dtype=layer.dtype)
        layer._biases = np.array(biases, dtype=layer.dtype)
        return layer

    @classmethod
    def from_values(cls, input_size: int, output_size: int,
                    activation: Union[Activation, str],
                    weights: Sequence[float], biases: Sequence[float],
                    dtype=np.float64) -> 'Dense':
        """Layer with the given weights (row-major) and biases"""
        layer = cls(input_size, output_size, activation, dtype=dtype)
        layer.set_weights(weights)
        layer.set_biases(biases)
        return layer

    @property
    def input_size(self) -> int:
        return self._input_size

    @property
    def output_size(self) -> int:
        return self._biases.shape[0]

    @property
    def weights(self) -> np.ndarray:
        return self.get_weights()

    @property
    def biases(self) -> np.ndarray:
        return self.get_biases()

    def get_weights(self) -> np.ndarray:
        """Read-only view of the flat weight buffer"""
        return self._read_only(self._weights)

    def set_weights(self, weights: Sequence[float]) -> None:
        """Replace all weights, given flat row-major or as an (outputs, inputs) matrix"""
        weights = np.array(weights, dtype=self.dtype).ravel()
        expected = self._input_size * self.output_size
        if weights.shape[0] != expected:
            raise ValueError(f"Expected {expected} weights for a {self._input_size} x "
                             f"{self.output_size} layer, got {weights.shape[0]}")
        self._weights = weights

    def get_biases(self) -> np.ndarray:
        """Read-only view of the biases"""
        return self._read_only(self._biases)

    def set_biases(self, biases: Sequence[float]) -> None:
        """Replace all biases; the output size cannot change"""
        biases = np.array(biases, dtype=self.dtype).ravel()
        if biases.shape[0] != self.output_size:
            raise ValueError(f"Expected {self.output_size} biases, got {biases.shape[0]}")
        self._biases = biases

    def get_parameters(self) -> Tuple[np.ndarray, np.ndarray]:
        """Get weights and biases"""
        return self.get_weights(), self.get_biases()

    def compute(self, input: Sequence[float]) -> np.ndarray:
        """Forward pass: f(W*X + B)"""
        x = self._as_vector(input)
        return self._activate(self._pre_activation(x))

    def forward(self, input: Sequence[float]) -> np.ndarray:
        return self.compute(input)

    def supervised_train(self, rule, input: Sequence[float], target: Sequence[float]) -> None:
        """Train on one example with either the delta rule or gradient descent"""
        if isinstance(rule, PerceptronRule):
            self._delta_rule(rule.rate, input, target)
        elif isinstance(rule, GradientDescent):
            self.backprop_train(rule, input, target)
        else:
            raise TypeError(f"Unsupported training rule: {rule!r}")

    def backprop_train(self, rule, input: Sequence[float], target: Sequence[float]) -> np.ndarray:
        """Gradient descent step, returns the target vector for the previous layer

        The returned vector has the length of ``input`` and is computed from
        the weights as they were before this update.
        """
        if not isinstance(rule, GradientDescent):
            raise TypeError(f"Backpropagation needs a GradientDescent rule, got {rule!r}")

        x = self._as_vector(input)
        n = self._connected(x)
        matrix = self._matrix()

        raw = self._pre_activation(x)
        deltas = np.asarray(self.activation.backward(raw), dtype=self.dtype)
        out = self._activate(raw)

        returned = x.copy()
        returned[:n] -= matrix[:, :n].T @ deltas

        error = deltas * (out - self._as_target(target))
        matrix[:, :n] -= rule.rate * np.outer(error, x[:n])
        self._biases -= rule.rate * error

        return returned

    def _delta_rule(self, rate: float, input: Sequence[float], target: Sequence[float]) -> None:
        x = self._as_vector(input)
        n = self._connected(x)

        diff = self.compute(x) - self._as_target(target)
        self._matrix()[:, :n] -= rate * np.outer(diff, x[:n])
        self._biases -= rate * diff

    def _pre_activation(self, x: np.ndarray) -> np.ndarray:
        n = self._connected(x)
        return self._biases + self._matrix()[:, :n] @ x[:n]

    def _activate(self, raw: np.ndarray) -> np.ndarray:
        return np.asarray(self.activation.forward(raw), dtype=self.dtype)

    def _matrix(self) -> np.ndarray:
        # (outputs, inputs) view sharing memory with self._weights
        return self._weights.reshape(self.output_size, self._input_size)

    def _connected(self, x: np.ndarray) -> int:
        return min(self._input_size, x.shape[0])

    def _as_vector(self, values: Sequence[float]) -> np.ndarray:
        return np.array(values, dtype=self.dtype).reshape(-1)

    def _as_target(self, target: Sequence[float]) -> np.ndarray:
        t = self._as_vector(target)[:self.output_size]
        padded = np.zeros(self.output_size, dtype=self.dtype)
        padded[:t.shape[0]] = t
        return padded

    @staticmethod
    def _read_only(values: np.ndarray) -> np.ndarray:
        view = values.view()
        view.flags.writeable = False
        return view

    def __repr__(self) -> str:
        name = getattr(self.activation, 'name', type(self.activation).__name__)
        return f"Dense({self._input_size} → {self.output_size}, {name})"
