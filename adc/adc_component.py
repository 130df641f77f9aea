import logging

from . import BaseADCComponent
from .adc_config import ADC_ADDR, ADC_CHANNEL, FULL_SCALE, READ_FAILED

logger = logging.getLogger(__name__)


class ADCComponent(BaseADCComponent):
    def __init__(
        self,
        addr: int = ADC_ADDR,
        channel: int = ADC_CHANNEL,
        full_scale: float = FULL_SCALE,
    ):
        """
        Initializes the ADCComponent.

        Args:
            addr: Address of the ADCplate board.
            channel: Single-ended input number on the board.
            full_scale: Input voltage that maps to code 255.
        """
        super().__init__(addr=addr, channel=channel)
        self.full_scale = full_scale

        import piplates.ADCplate as ADC  # Hardware interface module for ADC operations

        self.ADC = ADC

    def probe(self) -> bool:
        try:
            adc_id = self.ADC.getID(self.addr)
        except Exception as e:
            logger.error(f"getID() threw an exception: {e}")
            return False
        if not adc_id:
            logger.error(f"Failed to connect to ADC at addr={self.addr}")
            return False
        logger.info(f"connected ADC-> id={adc_id}")
        return True

    def quantize(self, volts: float) -> int:
        code = round(volts / self.full_scale * 255)
        return min(max(code, 0), 255)

    def read(self, channel: int) -> int:
        try:
            volts = self.ADC.getADC(self.addr, f"S{channel}")
        except Exception as e:
            logger.warning(f"getADC() threw an exception: {e}")
            return READ_FAILED
        if volts is None:
            return READ_FAILED
        return self.quantize(volts)
