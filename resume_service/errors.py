class ResumeServiceError(Exception):
    """Base class for errors surfaced by the resume service"""


class UnsupportedFormatError(ResumeServiceError):
    """The uploaded document type cannot be turned into text"""


class SchemaValidationError(ResumeServiceError):
    """A record does not match the ResumeRecord shape"""


class TranslationError(ResumeServiceError):
    """The translation backend failed; no partial result is returned"""


class UnsupportedLanguageError(TranslationError):
    """Target language code is not in the language table"""


class TranslatorConfigError(TranslationError):
    """The selected translation backend is missing credentials or settings"""
