import logging
from abc import ABC, abstractmethod

from .adc_config import ADC_ADDR, ADC_CHANNEL, READ_FAILED

logger = logging.getLogger(__name__)


class ConverterNotFoundError(Exception):
    pass


class BaseADCComponent(ABC):
    def __init__(self, addr: int = ADC_ADDR, channel: int = ADC_CHANNEL):
        """
        Single-channel 8-bit converter access.

        Args:
            addr (int, optional): The address of the ADC device. Defaults to 0.
            channel (int, optional): The input channel sampled by the meter. Defaults to 0.
        """
        self.addr = addr
        self.channel = channel

    def read_sample(self) -> int:
        """
        Reads the configured channel.

        Returns:
            int: Sample in [0, 255], or READ_FAILED.
        """
        sample = self.read(self.channel)
        if sample == READ_FAILED:
            logger.warning(f"read failed-> addr={self.addr} channel={self.channel}")
        return sample

    @abstractmethod
    def probe(self) -> bool:
        """
        Checks that the converter answers at its address.
        """
        ...

    @abstractmethod
    def read(self, channel: int) -> int:
        """
        Abstract method to be implemented by subclasses.
        Should return an 8-bit sample, or READ_FAILED when the device did not answer.
        """
        ...
