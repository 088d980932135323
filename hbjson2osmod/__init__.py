from .errors import (TranslationError, SchemaError, UnknownTypeTagError, UnsupportedGeometryError,
                     DuplicateRegistrationError)
from .model import Model, TranslationResult, TranslationState, translate

__version__ = '0.1.0'
