import numpy as np
from typing import Callable


class Activation:
    """Base activation function class

    ``forward`` is the value of the function and ``backward`` its derivative,
    both evaluated element-wise at the pre-activation sums.
    """

    name = 'activation'

    def forward(self, x: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def backward(self, x: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Identity(Activation):
    """Identity activation function"""

    name = 'identity'

    def forward(self, x: np.ndarray) -> np.ndarray:
        return np.asarray(x).copy()

    def backward(self, x: np.ndarray) -> np.ndarray:
        return np.ones_like(x)


class Step(Activation):
    """Heaviside step, 1 for strictly positive inputs"""

    name = 'step'

    def forward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        return (x > 0).astype(x.dtype)

    def backward(self, x: np.ndarray) -> np.ndarray:
        return np.zeros_like(x)


class Sigmoid(Activation):
    """Logistic sigmoid activation function"""

    name = 'sigmoid'

    def forward(self, x: np.ndarray) -> np.ndarray:
        return 1.0 / (1.0 + np.exp(-x))

    def backward(self, x: np.ndarray) -> np.ndarray:
        s = self.forward(x)
        return s * (1.0 - s)


class Tanh(Activation):
    """Hyperbolic tangent activation function"""

    name = 'tanh'

    def forward(self, x: np.ndarray) -> np.ndarray:
        return np.tanh(x)

    def backward(self, x: np.ndarray) -> np.ndarray:
        return 1.0 - np.tanh(x) ** 2


class ReLU(Activation):
    """Rectified linear unit, zero slope at and below 0"""

    name = 'relu'

    def forward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        return x * (x > 0)

    def backward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        return (x > 0).astype(x.dtype)


class LeakyReLU(Activation):
    """ReLU passing ``alpha`` times the negative part"""

    name = 'leaky_relu'

    def __init__(self, alpha: float = 0.01):
        self.alpha = alpha

    def _slope(self, x: np.ndarray) -> np.ndarray:
        return np.where(x > 0, 1.0, self.alpha).astype(x.dtype)

    def forward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        return x * self._slope(x)

    def backward(self, x: np.ndarray) -> np.ndarray:
        return self._slope(np.asarray(x))

    def __repr__(self) -> str:
        return f"LeakyReLU(alpha={self.alpha})"


class ELU(Activation):
    """Exponential linear unit, saturating at ``-alpha``"""

    name = 'elu'

    def __init__(self, alpha: float = 1.0):
        self.alpha = alpha

    def forward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        negative = self.alpha * np.expm1(np.minimum(x, 0))
        return np.where(x > 0, x, negative).astype(x.dtype)

    def backward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        negative = self.alpha * np.exp(np.minimum(x, 0))
        return np.where(x > 0, 1.0, negative).astype(x.dtype)

    def __repr__(self) -> str:
        return f"ELU(alpha={self.alpha})"


class GELU(Activation):
    """GELU, tanh approximation"""

    name = 'gelu'

    # sqrt(2 / pi) and the cubic coefficient of the approximation
    SCALE = np.sqrt(2.0 / np.pi)
    CUBIC = 0.044715

    def _inner(self, x: np.ndarray) -> np.ndarray:
        return np.tanh(self.SCALE * (x + self.CUBIC * x ** 3))

    def forward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        return (0.5 * x * (1 + self._inner(x))).astype(x.dtype)

    def backward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        t = self._inner(x)
        slope = self.SCALE * (1 + 3 * self.CUBIC * x ** 2)
        return (0.5 * (1 + t) + 0.5 * x * (1 - t ** 2) * slope).astype(x.dtype)


class FunctionActivation(Activation):
    """Wraps a pair of scalar callables ``(value, derivative)``"""

    name = 'function'

    def __init__(self, value: Callable[[float], float], derivative: Callable[[float], float]):
        self.value = value
        self.derivative = derivative
        self._value = np.vectorize(value, otypes=[float])
        self._derivative = np.vectorize(derivative, otypes=[float])

    def forward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        return self._value(x).astype(x.dtype, copy=False)

    def backward(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x)
        return self._derivative(x).astype(x.dtype, copy=False)

    def __repr__(self) -> str:
        return f"FunctionActivation({self.value!r}, {self.derivative!r})"


def get_activation(name: str) -> Activation:
    """Get activation function by name"""
    activations = {
        'identity': Identity(),
        'step': Step(),
        'sigmoid': Sigmoid(),
        'tanh': Tanh(),
        'relu': ReLU(),
        'leaky_relu': LeakyReLU(),
        'elu': ELU(),
        'gelu': GELU()
    }

    if name not in activations:
        raise ValueError(f"Unknown activation function: {name}")

    return activations[name]
