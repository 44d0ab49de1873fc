"""Input validation for classpath records."""
from typing import Tuple

from .exceptions import ValidationError

DANGEROUS_TOKENS: Tuple[str, ...] = ('<', '>', '&', "'", '"', 'file://', '../')


def dangerous(text: str) -> bool:
    """Checks if text contains any forbidden token."""
    return any(token in text for token in DANGEROUS_TOKENS)


def has_whitespace(text: str) -> bool:
    return any(ch.isspace() for ch in text)


def validate_path(path: str) -> None:
    """
    Validates a classpath path.
    
    Raises:
        ValidationError: If path is blank, contains whitespace or a forbidden token
    """
    if not path:
        raise ValidationError("Classpath path is blank")
    if dangerous(path) or has_whitespace(path):
        raise ValidationError("Classpath path has invalid characters")


def validate_note(note: str) -> None:
    if note and dangerous(note):
        raise ValidationError("Classpath note has invalid characters")


def validate_record(record) -> None:
    """Validates path and note of a classpath record."""
    validate_path(record.path)
    validate_note(record.note)


def clean_ident(ident: str) -> str:
    """
    Strips a resource identifier.
    
    Raises:
        ValidationError: If nothing is left after stripping
    """
    cleaned = ident.strip()
    if not cleaned:
        raise ValidationError("Resource ident is blank")
    return cleaned
