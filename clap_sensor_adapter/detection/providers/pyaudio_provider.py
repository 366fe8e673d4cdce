"""
PyAudio clap detection provider implementation.

This module implements the ClapDetectorProvider interface on top of a PyAudio
input stream. Frames are read on a background thread and analysed with numpy;
each detected clap is published on the provider's channel.
"""

import logging
import threading
import time
from datetime import datetime
from typing import Optional

import numpy as np
import pyaudio

from ..channel import ClapChannel
from ..clap_analysis import detect_clap, threshold_from_fraction
from ..clap_interface import ClapDetectorProvider, ClapEvent

logger = logging.getLogger(__name__)


class PyAudioClapProvider(ClapDetectorProvider):
    """
    Microphone implementation of the clap detection provider interface.

    Reads mono 16-bit frames from the default (or configured) input device
    and flags sharp transients as claps. A refractory interval suppresses the
    echo of a single clap across consecutive frames.
    """

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        frames_per_buffer: int = 1024,
        threshold: float = 0.25,
        min_interval_ms: int = 200,
        device_index: Optional[int] = None,
        channel: Optional[ClapChannel] = None,
    ):
        """
        Initialize the PyAudio provider.

        Args:
            sample_rate: Input sample rate in Hz
            channels: Number of input channels (only the first is analysed)
            frames_per_buffer: Frames read per iteration
            threshold: Minimum sample delta as a fraction of the int16 range
            min_interval_ms: Minimum time between two reported claps
            device_index: Optional PyAudio input device index
            channel: Channel to publish on (a new one is created if omitted)

        Raises:
            ValueError: If threshold is outside 0.0-1.0
        """
        super().__init__(channel)

        if not 0.0 < threshold <= 1.0:
            raise ValueError(f"Clap threshold must be in (0.0, 1.0], got {threshold}")

        self.sample_rate = sample_rate
        self.channels = channels
        self.frames_per_buffer = frames_per_buffer
        self.threshold = threshold
        self.min_interval_ms = min_interval_ms
        self.device_index = device_index

        self._threshold_units = threshold_from_fraction(threshold)
        self._previous_sample = 0
        self._last_clap: Optional[float] = None

        self._pa = None
        self._audio_stream = None
        self._thread: Optional[threading.Thread] = None

        logger.info(
            f"Initialized PyAudio clap provider (sample_rate={sample_rate}, "
            f"threshold={threshold}, min_interval_ms={min_interval_ms})"
        )

    def start(self) -> None:
        """
        Open the input stream and start the listening thread.

        Raises:
            RuntimeError: If the audio stream cannot be opened
        """
        if self._running:
            logger.debug("PyAudio clap provider already running")
            return

        try:
            self._pa = pyaudio.PyAudio()
            self._audio_stream = self._pa.open(
                rate=self.sample_rate,
                channels=self.channels,
                format=pyaudio.paInt16,
                input=True,
                frames_per_buffer=self.frames_per_buffer,
                input_device_index=self.device_index,
            )
        except Exception as e:
            logger.error(f"Failed to start PyAudio clap provider: {e}")
            self.stop()
            raise RuntimeError(f"Clap detector initialization failed: {e}")

        self._previous_sample = 0
        self._last_clap = None
        self._running = True

        self._thread = threading.Thread(
            target=self._listen_loop, name="CLAP_LISTEN", daemon=True
        )
        self._thread.start()

        logger.info("PyAudio clap provider started and listening")

    def _listen_loop(self) -> None:
        while self._running:
            try:
                data = self._audio_stream.read(
                    self.frames_per_buffer,
                    exception_on_overflow=False,
                )
                self.process_frame(data)
            except Exception as e:
                if self._running:
                    logger.error(f"Error processing audio frame: {e}")
                    # back off for one frame period so a dead stream does not spin
                    time.sleep(self.frames_per_buffer / self.sample_rate)

    def process_frame(self, data: bytes) -> Optional[ClapEvent]:
        """
        Analyse one frame of raw audio and publish a clap if one is found.

        Args:
            data: Raw interleaved int16 frame as returned by the stream

        Returns:
            The published event, or None
        """
        samples = np.frombuffer(data, dtype=np.int16)
        if self.channels > 1:
            samples = samples[:: self.channels]
        if samples.size == 0:
            return None

        detected, peak = detect_clap(samples, self._previous_sample, self._threshold_units)
        self._previous_sample = int(samples[-1])

        if not detected:
            return None

        now = time.monotonic()
        if self._last_clap is not None and (now - self._last_clap) * 1000 < self.min_interval_ms:
            return None
        self._last_clap = now

        event = ClapEvent(timestamp=datetime.now(), peak=peak)
        logger.debug(f"Clap detected (peak={peak:.2f})")
        self.channel.publish(event)
        return event

    def stop(self) -> None:
        """
        Stop listening and release PyAudio resources.

        Can be called multiple times safely.
        """
        self._running = False

        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout=1.0)
        self._thread = None

        if self._audio_stream is not None:
            try:
                self._audio_stream.stop_stream()
                self._audio_stream.close()
                logger.debug("Audio stream closed")
            except Exception as e:
                logger.warning(f"Error closing audio stream: {e}")
            finally:
                self._audio_stream = None

        if self._pa is not None:
            try:
                self._pa.terminate()
                logger.debug("PyAudio terminated")
            except Exception as e:
                logger.warning(f"Error terminating PyAudio: {e}")
            finally:
                self._pa = None

        logger.info("PyAudio clap provider stopped")
