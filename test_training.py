import pytest

from training import GradientDescent, PerceptronRule, TrainingRule, get_rule


def test_rules_carry_rate():
    rule = PerceptronRule(learning_rate=0.5)
    assert rule.rate == 0.5
    assert isinstance(rule, TrainingRule)
    assert GradientDescent(0.25).rate == 0.25


def test_get_rule():
    assert isinstance(get_rule('perceptron', 0.5), PerceptronRule)
    assert isinstance(get_rule('gradient_descent'), GradientDescent)
    assert isinstance(get_rule('sgd', 0.01), GradientDescent)
    assert get_rule('sgd', 0.01).learning_rate == 0.01

    with pytest.raises(ValueError):
        get_rule('adam')
