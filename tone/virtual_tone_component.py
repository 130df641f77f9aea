import logging

from . import BaseToneComponent

logger = logging.getLogger(__name__)


class VirtualToneComponent(BaseToneComponent):
    def start_output(self, freq: int) -> None:
        logger.debug(f"buzzer on: {freq} Hz")

    def change_output(self, freq: int) -> None:
        logger.debug(f"buzzer retuned: {freq} Hz")

    def stop_output(self) -> None:
        logger.debug("buzzer off")
