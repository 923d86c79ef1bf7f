"""
Error types for the translation tools.

ConfigurationError stops a run before the first file. TranslationError and
WriteError belong to a single (file, language) job; the pipeline records
them and moves on.

Usage:
    from mdtranslate.utils.exceptions import TranslationError

    raise TranslationError("Request failed", source_file=path, language="km", api="google")
"""
from typing import Optional, Dict, Any


class TranslatorToolError(Exception):
    """Base exception for all translation tool errors."""

    def __init__(
        self,
        message: str,
        *,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = dict(details or {})

    def _attach(self, **context: Any) -> None:
        """Set context attributes; non-empty values are also listed in details."""
        for key, value in context.items():
            setattr(self, key, value)
            if value:
                self.details[key] = value

    def __str__(self) -> str:
        text = self.message
        if self.details:
            text += f" | Details: {self.details}"
        if self.cause:
            text += f" | Caused by: {self.cause}"
        return text


class ConfigurationError(TranslatorToolError):
    """Bad root, language, engine, credential or config file."""

    def __init__(self, message: str, *, config_key: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self._attach(config_key=config_key)


class TranslationError(TranslatorToolError):
    """A provider call failed or mangled the protected Markdown."""

    def __init__(
        self,
        message: str,
        *,
        source_file: Optional[str] = None,
        language: Optional[str] = None,
        api: Optional[str] = None,
        **kwargs: Any
    ):
        super().__init__(message, **kwargs)
        self._attach(source_file=source_file, language=language, api=api)


class WriteError(TranslatorToolError):
    """A translated file could not be saved."""

    def __init__(self, message: str, *, file_path: Optional[str] = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self._attach(file_path=file_path)
