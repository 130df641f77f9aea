from .serial_component import SerialLineComponent, SERIAL_TOPICS
