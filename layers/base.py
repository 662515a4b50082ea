import numpy as np
from typing import Sequence


class Compute:
    """Something that maps an input vector to an output vector"""

    @property
    def input_size(self) -> int:
        raise NotImplementedError

    @property
    def output_size(self) -> int:
        raise NotImplementedError

    def compute(self, input: Sequence[float]) -> np.ndarray:
        raise NotImplementedError


class SupervisedTrain:
    """Can be trained in place on one (input, target) example"""

    def supervised_train(self, rule, input: Sequence[float], target: Sequence[float]) -> None:
        raise NotImplementedError


class BackpropTrain:
    """Can be trained in place and report an error vector for the layer before it"""

    def backprop_train(self, rule, input: Sequence[float], target: Sequence[float]) -> np.ndarray:
        raise NotImplementedError
