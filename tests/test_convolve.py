import numpy as np
import pytest

from framedsp import InvalidArgumentError, convolve
from framedsp.signal import block_fft_length


@pytest.mark.parametrize(
    ("signal_length", "impulse_length"),
    [(1, 1), (1, 5), (5, 1), (10, 3), (100, 600), (1000, 10), (3000, 257), (4097, 33)],
)
def test_convolve_matches_direct_convolution(signal_length: int, impulse_length: int) -> None:
    rng = np.random.default_rng(42)
    signal = rng.standard_normal(signal_length)
    impulse_response = rng.standard_normal(impulse_length)

    actual = convolve(signal, impulse_response)

    assert actual.shape == (signal_length + impulse_length - 1,)
    np.testing.assert_allclose(
        actual, np.convolve(signal, impulse_response), atol=1e-10, rtol=0.0
    )


def test_convolve_is_linear() -> None:
    rng = np.random.default_rng(0)
    x1 = rng.standard_normal(500)
    x2 = rng.standard_normal(500)
    h = rng.standard_normal(40)

    combined = convolve(2.0 * x1 - 3.0 * x2, h)
    separate = 2.0 * convolve(x1, h) - 3.0 * convolve(x2, h)

    np.testing.assert_allclose(combined, separate, atol=1e-10, rtol=0.0)


def test_convolve_with_delta_copies_signal() -> None:
    rng = np.random.default_rng(1)
    signal = rng.standard_normal(300)
    impulse_response = np.zeros(5)
    impulse_response[2] = 1.0

    actual = convolve(signal, impulse_response)

    np.testing.assert_allclose(actual[2:302], signal, atol=1e-12, rtol=0.0)
    np.testing.assert_allclose(actual[:2], 0.0, atol=1e-12, rtol=0.0)


@pytest.mark.parametrize("length", [50, 120, 400])
def test_convolve_into_strided_destination(length: int) -> None:
    rng = np.random.default_rng(7)
    signal = rng.standard_normal(200)[::2]
    impulse_response = rng.standard_normal(21)
    backing = np.full(3 * length, 123.0)
    destination = backing[::3]

    result = convolve(signal, impulse_response, destination)

    assert result is destination
    expected = np.zeros(length)
    full = np.convolve(signal, impulse_response)
    size = min(length, full.shape[0])
    expected[:size] = full[:size]
    np.testing.assert_allclose(destination, expected, atol=1e-10, rtol=0.0)
    np.testing.assert_array_equal(backing[1::3], 123.0)
    np.testing.assert_array_equal(backing[2::3], 123.0)


@pytest.mark.parametrize(
    ("signal_length", "impulse_length", "expected"),
    [(1000, 10, 1024), (10, 3, 32), (100, 600, 2048), (1, 1, 2), (5000, 1000, 2048)],
)
def test_block_fft_length(signal_length: int, impulse_length: int, expected: int) -> None:
    assert block_fft_length(signal_length, impulse_length) == expected


def test_convolve_rejects_empty_inputs() -> None:
    with pytest.raises(InvalidArgumentError, match="empty"):
        convolve(np.zeros(0), np.ones(3))
    with pytest.raises(InvalidArgumentError, match="empty"):
        convolve(np.ones(3), np.zeros(0))
    with pytest.raises(InvalidArgumentError, match="float64"):
        convolve(np.ones(3), np.ones(3), np.zeros(5, dtype=np.float32))
