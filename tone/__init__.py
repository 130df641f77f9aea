from .base_tone_component import BaseToneComponent
from .tone_component import ToneComponent
from .virtual_tone_component import VirtualToneComponent
