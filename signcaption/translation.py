"""
Sign label translation tables.
"""
from typing import Dict, List, Mapping, Optional


SIGN_TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "english": {
        "Hello": "Hello",
        "Thank you": "Thank you",
        "Please": "Please",
        "Sorry": "Sorry",
        "Yes": "Yes",
        "No": "No",
        "Help": "Help",
        "Good": "Good",
        "Bad": "Bad",
        "Happy": "Happy",
        "Sad": "Sad",
        "Love": "Love",
        "Family": "Family",
        "Work": "Work",
        "Home": "Home",
    },
    "spanish": {
        "Hello": "Hola",
        "Thank you": "Gracias",
        "Please": "Por favor",
        "Sorry": "Lo siento",
        "Yes": "Sí",
        "No": "No",
        "Help": "Ayuda",
        "Good": "Bueno",
        "Bad": "Malo",
        "Happy": "Feliz",
        "Sad": "Triste",
        "Love": "Amor",
        "Family": "Familia",
        "Work": "Trabajo",
        "Home": "Casa",
    },
    "khmer": {
        "Hello": "សួស្តី",
        "Thank you": "អរគុណ",
        "Please": "សូម",
        "Sorry": "សុំទោស",
        "Yes": "បាទ",
        "No": "ទេ",
        "Help": "ជួយ",
        "Good": "ល្អ",
        "Bad": "មិនល្អ",
        "Happy": "រីករាយ",
        "Sad": "ព្រួយ",
        "Love": "ស្រលាញ់",
        "Family": "គ្រួសារ",
        "Work": "ការងារ",
        "Home": "ផ្ទះ",
    },
}


class Translator:
    """Maps canonical sign labels to display text in one language."""

    def __init__(self, language: str = "english",
                 extra: Optional[Mapping[str, Mapping[str, str]]] = None):
        """
        Args:
            language: Key of the table to use
            extra: Additional or overriding tables, keyed by language

        Raises:
            ValueError: if no table exists for the language
        """
        tables = {lang: dict(table) for lang, table in SIGN_TRANSLATIONS.items()}
        for lang, table in (extra or {}).items():
            tables.setdefault(lang, {}).update(table)

        if language not in tables:
            raise ValueError(
                f"Unknown language {language!r}, expected one of {sorted(tables)}"
            )

        self.language = language
        self._tables = tables
        self._table = tables[language]

    def __call__(self, label: str) -> str:
        return self.translate(label)

    def translate(self, label: str) -> str:
        """Return the display text for a label, or the label itself when unmapped."""
        return self._table.get(label, label)

    def languages(self) -> List[str]:
        return sorted(self._tables)
