"""Tests for the PyAudio clap detection provider."""

import sys
import threading
import time
from unittest.mock import MagicMock, patch

import numpy as np
import pytest

# Mock the audio backend before importing to avoid needing PortAudio
sys.modules['pyaudio'] = MagicMock()

from clap_sensor_adapter.detection import get_clap_provider
from clap_sensor_adapter.detection.providers.pyaudio_provider import PyAudioClapProvider

FRAME = 256


def silence() -> bytes:
    return np.zeros(FRAME, dtype=np.int16).tobytes()


def clap() -> bytes:
    samples = np.zeros(FRAME, dtype=np.int16)
    samples[100] = 30000
    return samples.tobytes()


@pytest.fixture
def provider():
    """Provider with a short frame and default threshold."""
    provider = PyAudioClapProvider(frames_per_buffer=FRAME, min_interval_ms=200)
    yield provider
    provider.stop()


def test_provider_initialization(provider):
    """Test PyAudioClapProvider stores its settings without opening audio."""
    assert provider.sample_rate == 16000
    assert provider.channels == 1
    assert provider.frames_per_buffer == FRAME
    assert provider.threshold == 0.25
    assert provider.is_running is False


def test_invalid_threshold():
    """Test thresholds outside (0, 1] are rejected."""
    with pytest.raises(ValueError):
        PyAudioClapProvider(threshold=0.0)

    with pytest.raises(ValueError):
        PyAudioClapProvider(threshold=1.2)


def test_process_frame_publishes_clap(provider):
    """Test a transient frame publishes one event and silence publishes none."""
    received = []
    provider.on_clap(received.append)

    assert provider.process_frame(silence()) is None
    event = provider.process_frame(clap())

    assert event is not None
    assert received == [event]
    assert event.peak == pytest.approx(30000 / 65536)


def test_process_frame_refractory_interval(provider):
    """Test consecutive claps inside min_interval_ms are reported once."""
    received = []
    provider.on_clap(received.append)

    provider.process_frame(clap())
    provider.process_frame(clap())

    assert len(received) == 1


def test_process_frame_without_refractory_interval():
    """Test every clap frame is reported when min_interval_ms is zero."""
    provider = PyAudioClapProvider(frames_per_buffer=FRAME, min_interval_ms=0)
    received = []
    provider.on_clap(received.append)

    provider.process_frame(clap())
    provider.process_frame(clap())

    assert len(received) == 2


def test_process_frame_uses_first_channel_only():
    """Test interleaved stereo frames are analysed on the first channel."""
    provider = PyAudioClapProvider(channels=2, frames_per_buffer=FRAME)
    stereo = np.zeros(FRAME * 2, dtype=np.int16)
    stereo[1::2] = 30000  # spike only on the second channel

    assert provider.process_frame(stereo.tobytes()) is None


@patch('clap_sensor_adapter.detection.providers.pyaudio_provider.pyaudio')
def test_start_opens_stream_and_publishes(mock_pyaudio, provider):
    """Test start opens the input stream and the listen thread publishes claps."""
    mock_pa_instance = MagicMock()
    mock_stream = MagicMock()
    mock_pyaudio.PyAudio.return_value = mock_pa_instance
    mock_pa_instance.open.return_value = mock_stream
    mock_stream.read.return_value = clap()

    detected = threading.Event()
    provider.on_clap(lambda event: detected.set())

    provider.start()
    provider.start()  # idempotent

    assert detected.wait(timeout=2.0)
    assert provider.is_running is True
    mock_pyaudio.PyAudio.assert_called_once()

    open_kwargs = mock_pa_instance.open.call_args.kwargs
    assert open_kwargs["rate"] == 16000
    assert open_kwargs["channels"] == 1
    assert open_kwargs["input"] is True
    assert open_kwargs["frames_per_buffer"] == FRAME

    provider.stop()

    assert provider.is_running is False
    mock_stream.stop_stream.assert_called_once()
    mock_stream.close.assert_called_once()
    mock_pa_instance.terminate.assert_called_once()


@patch('clap_sensor_adapter.detection.providers.pyaudio_provider.pyaudio')
def test_listen_loop_survives_read_errors(mock_pyaudio, provider):
    """Test a failing read is logged and the loop keeps listening."""
    mock_pa_instance = MagicMock()
    mock_stream = MagicMock()
    mock_pyaudio.PyAudio.return_value = mock_pa_instance
    mock_pa_instance.open.return_value = mock_stream

    reads = [OSError("Input overflowed")]

    def read(frames, exception_on_overflow=False):
        if reads:
            raise reads.pop()
        return clap()

    mock_stream.read.side_effect = read

    detected = threading.Event()
    provider.on_clap(lambda event: detected.set())
    provider.start()

    assert detected.wait(timeout=2.0)


@patch('clap_sensor_adapter.detection.providers.pyaudio_provider.pyaudio')
def test_listen_loop_backs_off_on_persistent_read_errors(mock_pyaudio, provider):
    """Test a stream that always fails is retried at frame pace, not in a tight loop."""
    mock_pa_instance = MagicMock()
    mock_stream = MagicMock()
    mock_pyaudio.PyAudio.return_value = mock_pa_instance
    mock_pa_instance.open.return_value = mock_stream
    mock_stream.read.side_effect = OSError("Device unavailable")

    provider.start()
    time.sleep(0.2)
    provider.stop()

    # One frame period is 256 / 16000 s, so roughly a dozen reads fit in 0.2 s
    assert 1 <= mock_stream.read.call_count < 100


@patch('clap_sensor_adapter.detection.providers.pyaudio_provider.pyaudio')
def test_start_failure_raises_runtime_error(mock_pyaudio, provider):
    """Test stream initialization failures surface as RuntimeError."""
    mock_pa_instance = MagicMock()
    mock_pyaudio.PyAudio.return_value = mock_pa_instance
    mock_pa_instance.open.side_effect = OSError("No default input device")

    with pytest.raises(RuntimeError) as exc_info:
        provider.start()

    assert "initialization failed" in str(exc_info.value)
    assert provider.is_running is False
    mock_pa_instance.terminate.assert_called_once()


def test_stop_without_start_is_safe(provider):
    """Test stop can be called on a provider that never started."""
    provider.stop()
    provider.stop()

    assert provider.is_running is False


def test_factory_builds_pyaudio_provider():
    """Test the factory passes configuration through to the provider."""
    provider = get_clap_provider(
        "pyaudio",
        {"sample_rate": 44100, "threshold": 0.5, "min_interval_ms": 100, "device_index": 2},
    )

    assert isinstance(provider, PyAudioClapProvider)
    assert provider.sample_rate == 44100
    assert provider.threshold == 0.5
    assert provider.min_interval_ms == 100
    assert provider.device_index == 2
