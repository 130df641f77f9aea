from .meter_state import MeterState
from .meter_component import MeterComponent
