import logging

import numpy as np
import pytest

from momentum_net import InvalidConfiguration, NetworkConfig, NeuralNetwork, xor_patterns


def _network(**overrides) -> NeuralNetwork:
    params = dict(input_size=2, hidden_size=3, output_size=1, iterations=250, seed=0)
    params.update(overrides)
    return NeuralNetwork(NetworkConfig(**params))


def test_train_runs_every_configured_epoch() -> None:
    history = _network().train(xor_patterns())
    assert len(history.epoch_errors) == 250
    assert history.final_error == history.epoch_errors[-1]


def test_per_call_iterations_override_config() -> None:
    history = _network().train(xor_patterns(), iterations=7)
    assert len(history.epoch_errors) == 7


def test_epoch_telemetry_is_sampled(caplog) -> None:
    events: list[tuple[int, float]] = []
    net = _network(log_every=100)
    with caplog.at_level(logging.INFO, logger="momentum_net.network"):
        history = net.train(xor_patterns(), on_epoch=lambda epoch, error: events.append((epoch, error)))

    assert [epoch for epoch, _ in events] == [0, 100, 200]
    for epoch, error in events:
        assert error == pytest.approx(history.epoch_errors[epoch])
    messages = [record.getMessage() for record in caplog.records if "Error at epoch" in record.getMessage()]
    assert len(messages) == 3
    assert messages[1].startswith("Error at epoch 100:")


def test_telemetry_can_be_disabled(caplog) -> None:
    events = []
    with caplog.at_level(logging.INFO, logger="momentum_net.network"):
        _network(log_every=0).train(xor_patterns(), on_epoch=lambda *args: events.append(args))
    assert events == []
    assert not any("Error at epoch" in record.getMessage() for record in caplog.records)


def test_telemetry_does_not_change_training() -> None:
    quiet = _network(log_every=0)
    chatty = _network(log_every=1)
    quiet.train(xor_patterns())
    chatty.train(xor_patterns(), on_epoch=lambda *args: None, progress=True)
    for name, matrix in quiet.weights().items():
        assert np.array_equal(matrix, chatty.weights()[name])


def test_repeated_training_continues_from_current_weights() -> None:
    net = _network(iterations=400)
    first = net.train(xor_patterns())
    second = net.train(xor_patterns())
    assert second.epoch_errors[0] <= first.epoch_errors[0]


def test_empty_pattern_set_trains_to_zero_error() -> None:
    history = _network(iterations=3).train([])
    assert history.epoch_errors == [0.0, 0.0, 0.0]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"iterations": 0},
        {"iterations": -5},
        {"learning_rate": 0.0},
        {"momentum": -0.1},
    ],
)
def test_bad_training_overrides_are_rejected(kwargs) -> None:
    net = _network()
    before = net.weights()
    with pytest.raises(InvalidConfiguration):
        net.train(xor_patterns(), **kwargs)
    for name, matrix in net.weights().items():
        assert np.array_equal(matrix, before[name])


def test_infer_logs_each_pattern(caplog) -> None:
    net = _network()
    with caplog.at_level(logging.INFO, logger="momentum_net.network"):
        net.infer(xor_patterns())
    reports = [record.getMessage() for record in caplog.records if record.getMessage().startswith("Input:")]
    assert len(reports) == 4
    assert "expected: 1.0000" in reports[1]
