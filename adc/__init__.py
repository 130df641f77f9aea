from .adc_config import READ_FAILED
from .base_adc_component import BaseADCComponent, ConverterNotFoundError
from .adc_component import ADCComponent
from .virtual_adc_component import VirtualADCComponent
