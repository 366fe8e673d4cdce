"""Tests for clap analysis, the manual provider and the provider factory."""

import sys
from unittest.mock import patch

import numpy as np
import pytest

from clap_sensor_adapter.detection import ClapChannel, get_clap_provider
from clap_sensor_adapter.detection.clap_analysis import (
    detect_clap,
    threshold_from_fraction,
)
from clap_sensor_adapter.detection.providers import ManualClapProvider

THRESHOLD = threshold_from_fraction(0.25)


def test_threshold_from_fraction():
    """Test sensitivity fractions map onto the int16 range."""
    assert threshold_from_fraction(0.25) == 16384
    assert threshold_from_fraction(1.0) == 65536


def test_quiet_frame_is_not_a_clap():
    """Test small sample deltas are ignored."""
    samples = np.array([100, 200, 150], dtype=np.int16)

    detected, peak = detect_clap(samples, 0, THRESHOLD)

    assert detected is False
    assert peak == pytest.approx(100 / 65536)


def test_sharp_transient_is_a_clap():
    """Test a full-scale swing is detected without int16 overflow."""
    samples = np.array([30000, -30000], dtype=np.int16)

    detected, peak = detect_clap(samples, 30000, THRESHOLD)

    assert detected is True
    assert peak == pytest.approx(60000 / 65536)


def test_previous_sample_is_carried_over():
    """Test the jump between frames counts towards detection."""
    samples = np.zeros(8, dtype=np.int16)

    assert detect_clap(samples, 0, THRESHOLD)[0] is False
    assert detect_clap(samples, -20000, THRESHOLD)[0] is True


def test_empty_frame():
    """Test an empty frame never reports a clap."""
    assert detect_clap(np.array([], dtype=np.int16), 0, THRESHOLD) == (False, 0.0)


def test_manual_provider_publishes_when_running():
    """Test triggers are published only while the provider runs."""
    provider = ManualClapProvider()
    received = []
    provider.on_clap(received.append)

    assert provider.trigger() is None

    provider.start()
    provider.start()  # idempotent
    event = provider.trigger(peak=0.6)

    assert provider.is_running is True
    assert received == [event]
    assert event.peak == 0.6

    provider.stop()
    provider.stop()
    assert provider.trigger() is None
    assert len(received) == 1


def test_manual_provider_context_manager():
    """Test the provider starts and stops as a context manager."""
    with ManualClapProvider() as provider:
        assert provider.is_running is True

    assert provider.is_running is False


def test_factory_manual_provider_uses_given_channel():
    """Test the factory wires the supplied channel into the provider."""
    channel = ClapChannel()
    provider = get_clap_provider("Manual", channel=channel)

    assert isinstance(provider, ManualClapProvider)
    assert provider.channel is channel


def test_factory_unknown_provider():
    """Test unknown provider names are rejected."""
    with pytest.raises(ValueError) as exc_info:
        get_clap_provider("snowboy")

    assert "Unknown clap provider" in str(exc_info.value)


def test_factory_pyaudio_without_backend():
    """Test a missing PyAudio install surfaces as RuntimeError."""
    with patch.dict(sys.modules, {
        "pyaudio": None,
        "clap_sensor_adapter.detection.providers.pyaudio_provider": None,
    }):
        with pytest.raises(RuntimeError) as exc_info:
            get_clap_provider("pyaudio")

    assert "PyAudio is not installed" in str(exc_info.value)
