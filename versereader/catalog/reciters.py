"""Narrator catalog and translation edition lookups."""

from __future__ import annotations

from ..models.datatypes import Reciter


RECITERS = (
    Reciter(id=1, name="Mishary Rashid Alafasy", subfolder="Alafasy_128kbps"),
    Reciter(id=2, name="Abdul Basit Abdul Samad (Murattal)", subfolder="Abdul_Basit_Murattal_192kbps"),
    Reciter(id=3, name="Mahmoud Khalil Al-Husary", subfolder="Husary_128kbps"),
    Reciter(id=4, name="Mohamed Siddiq Al-Minshawi (Murattal)", subfolder="Minshawy_Murattal_128kbps"),
    Reciter(id=5, name="Abdurrahmaan As-Sudais", subfolder="Abdurrahmaan_As-Sudais_192kbps"),
    Reciter(id=6, name="Saad Al-Ghamdi", subfolder="Ghamadi_40kbps"),
    Reciter(id=7, name="Maher Al-Muaiqly", subfolder="MaherAlMuaiqly128kbps"),
    Reciter(id=8, name="Saud Al-Shuraim", subfolder="Saood_ash-Shuraym_128kbps"),
)

# Language code -> translation edition on the content service.
TRANSLATION_EDITIONS = {
    "en": "en.asad",
    "ur": "ur.ahmedali",
}

TEXT_EDITION = "quran-uthmani"


def find_reciter(reciter_id: int) -> Reciter | None:
    """Return the narrator with this id, or `None` when unknown."""

    for reciter in RECITERS:
        if reciter.id == reciter_id:
            return reciter
    return None


def translation_edition(language: str) -> str:
    """Map a language code to its translation edition.

    Unknown codes fall back to the English edition, matching how the
    language selector treats anything that is not Urdu.
    """

    return TRANSLATION_EDITIONS.get(language, TRANSLATION_EDITIONS["en"])
