# services/translations.py
"""
Server-side strings that end up stored on records (not rendered UI text).
"""

from typing import Optional

FALLBACK_LANGUAGE = 'EN'

SUPPORTED_LANGUAGES = ('ES', 'EN', 'FR', 'IT', 'DE')

IMPORT_NOTE_TRANSLATIONS = {
    'ES': 'Importado desde archivo VCF por {operator}',
    'EN': 'Imported from VCF file by {operator}',
    'FR': 'Importé depuis un fichier VCF par {operator}',
    'IT': 'Importato da file VCF da {operator}',
    'DE': 'Importiert aus VCF-Datei von {operator}',
}


def normalize_language(language: Optional[str]) -> str:
    """Return a supported language code, falling back to English."""
    code = (language or '').strip().upper()
    return code if code in SUPPORTED_LANGUAGES else FALLBACK_LANGUAGE


def localized_import_note(language: Optional[str], operator_name: str) -> str:
    """
    Private note stored on groups created by a file import.

    Args:
        language: Language code of the organization (e.g. 'ES')
        operator_name: Name of the user who ran the import

    Returns:
        e.g. "Imported from VCF file by Jane Admin"
    """
    template = IMPORT_NOTE_TRANSLATIONS[normalize_language(language)]
    return template.format(operator=operator_name)
