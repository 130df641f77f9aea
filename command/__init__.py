from .interpreter import CommandInterpreter
