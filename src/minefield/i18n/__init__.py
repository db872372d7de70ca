from .translator import Translator, DEFAULT_LANGUAGE

__all__ = ["Translator", "DEFAULT_LANGUAGE"]
