from .spike import SpikeFilter
from .nearby import ProximityCollapser
