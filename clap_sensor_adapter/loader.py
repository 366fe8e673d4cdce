"""Gateway entry point for the clap sensor add-on."""

import logging
from typing import Callable, Optional, Union

from .detection.channel import ClapChannel
from .detection.clap_factory import get_clap_provider
from .detection.clap_interface import ClapDetectorProvider
from .gateway.interfaces import GatewayHost
from .gateway.models import AddonManifest, DeviceDescription, PropertyDescription
from .sensor.adapter import ClapSensorAdapter
from .sensor.clap_sensor import ClapSensor

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_ID = "clap-sensor-0"

DEFAULT_DEVICE_DESCRIPTION = DeviceDescription(
    name="Clap Sensor",
    type="binarySensor",
    properties={
        "on": PropertyDescription(name="on", type="boolean", value=False),
    },
)


def load_clap_sensor_adapter(
    addon_manager: GatewayHost,
    manifest: Union[AddonManifest, dict],
    error_callback: Callable[[str, str], None],
    detector: Optional[ClapDetectorProvider] = None,
) -> ClapSensorAdapter:
    """
    Create the clap sensor adapter and its pre-provisioned device.

    Starts clap detection, registers a ``ClapSensorAdapter`` with the
    gateway and adds the ``clap-sensor-0`` device. A detector that fails to
    start is reported through ``error_callback``; the adapter is still
    returned, its sensor simply never toggles.

    Args:
        addon_manager: Gateway capability the adapter registers with
        manifest: Add-on manifest; its name becomes the adapter's package name
        error_callback: Called as ``error_callback(package_name, message)``
        detector: Clap detector to use (default: microphone via PyAudio)

    Returns:
        ClapSensorAdapter: The registered adapter
    """
    manifest = AddonManifest.model_validate(manifest)

    try:
        if detector is None:
            detector = get_clap_provider("pyaudio")
        detector.start()
    except RuntimeError as e:
        logger.error(f"Clap detection unavailable: {e}")
        error_callback(manifest.name, str(e))

    clap_events = detector.channel if detector is not None else ClapChannel()
    adapter = ClapSensorAdapter(addon_manager, manifest.name, clap_events)
    device = ClapSensor(adapter, DEFAULT_DEVICE_ID, DEFAULT_DEVICE_DESCRIPTION)
    adapter.handle_device_added(device)

    logger.info(f"Loaded {manifest.name} with device {DEFAULT_DEVICE_ID}")
    return adapter
