import logging

from . import BaseToneComponent
from .tone_config import BUZZER_PIN, DUTY

logger = logging.getLogger(__name__)


class ToneComponent(BaseToneComponent):
    def __init__(self, pin: int = BUZZER_PIN, duty: float = DUTY):
        super().__init__()
        import RPi.GPIO as GPIO  # type: ignore

        self.GPIO = GPIO
        self.pin = pin
        self.duty = duty
        self.pwm = None

        GPIO.setmode(GPIO.BCM)
        GPIO.setup(self.pin, GPIO.OUT, initial=GPIO.LOW)

    def start_output(self, freq: int) -> None:
        self.pwm = self.GPIO.PWM(self.pin, freq)
        self.pwm.start(self.duty)

    def change_output(self, freq: int) -> None:
        self.pwm.ChangeFrequency(freq)

    def stop_output(self) -> None:
        self.pwm.stop()
        self.pwm = None
        self.GPIO.output(self.pin, self.GPIO.LOW)

    def cleanup(self) -> None:
        super().cleanup()
        self.GPIO.cleanup(self.pin)
