"""Exceptions raised while translating a Honeybee Model to OpenStudio."""


class TranslationError(Exception):
    """Base class of every fatal translation error."""


class SchemaError(TranslationError):
    """The document is not a Honeybee Model."""


class UnknownTypeTagError(TranslationError):
    """A sub-object carries a type tag outside the recognized set of its category."""

    def __init__(self, category: str, type_tag: str):
        self.category = category
        self.type_tag = type_tag
        super().__init__(f"Unknown {category} type '{type_tag}'.")


class UnsupportedGeometryError(TranslationError):
    """Geometry that has no OpenStudio counterpart, eg. orphaned faces."""


class DuplicateRegistrationError(TranslationError):
    def __init__(self, category: str, identifier: str):
        self.category = category
        self.identifier = identifier
        super().__init__(f"A {category} with identifier '{identifier}' is already registered.")
