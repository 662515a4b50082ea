class TrainingRule:
    """Base training rule class"""

    name = 'rule'

    def __init__(self, learning_rate: float = 0.1):
        self.learning_rate = learning_rate

    @property
    def rate(self) -> float:
        return self.learning_rate

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(learning_rate={self.learning_rate})"


class PerceptronRule(TrainingRule):
    """Delta rule: weights move against the raw output error.

    The activation derivative is ignored, which suits linear and step
    activations.
    """

    name = 'perceptron'


class GradientDescent(TrainingRule):
    """Gradient descent with backpropagation of an error vector.

    The output error is scaled by the activation derivative at the
    pre-activation sums, and each layer returns a vector the layer before it
    uses as its target.
    """

    name = 'gradient_descent'


def get_rule(name: str, learning_rate: float = 0.1) -> TrainingRule:
    """Get training rule by name"""
    rules = {
        'perceptron': PerceptronRule,
        'gradient_descent': GradientDescent,
        'sgd': GradientDescent
    }

    if name not in rules:
        raise ValueError(f"Unknown training rule: {name}")

    return rules[name](learning_rate=learning_rate)
