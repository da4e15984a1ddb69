from .antennas import Antenna
from .speed_tests import SpeedTest

__all__ = [
    "Antenna",
    "SpeedTest",
]
