import pytest

from engine.config import NetworkConfig


def test_defaults():
    config = NetworkConfig()
    assert config.hidden_sizes == []
    assert config.layer_sizes == [4, 2]
    assert config.rule == 'gradient_descent'


def test_hidden_sizes_are_copied():
    sizes = (8, 4)
    config = NetworkConfig(hidden_sizes=sizes)
    assert config.hidden_sizes == [8, 4]
    assert config.layer_sizes == [4, 8, 4, 2]


@pytest.mark.parametrize("kwargs", [
    {'input_size': -1},
    {'hidden_sizes': [3, -2]},
    {'learning_rate': 0.0},
    {'log_interval': 0},
    {'activation': 'softmax'},
    {'rule': 'adam'},
    {'weight_init': 'orthogonal'},
    {'dtype': 'int32'},
])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        NetworkConfig(**kwargs)


def test_from_dict_round_trip():
    config = NetworkConfig.from_dict({'input_size': 7, 'hidden_sizes': [3],
                                      'learning_rate': 0.1, 'unknown': True})
    assert config.input_size == 7
    assert config.learning_rate == 0.1
    assert NetworkConfig.from_dict(config.to_dict()) == config
