"""PC-SAFT equation of state."""

from .parameters import PcSaftParameters
from .pcsaft import PcSaft
