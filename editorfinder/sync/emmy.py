"""Emmy picture-editing reference data.

Television Academy editing categories and a curated set of recent winners
and nominees. Documents are written with ``set`` under stable IDs, so loading
twice leaves the same data behind.
"""

from __future__ import annotations

import logging
from typing import Any

from editorfinder.models.common import Collections
from editorfinder.store.base import SERVER_TIMESTAMP, DocumentStore

logger = logging.getLogger(__name__)

ACADEMY = "Academy of Television Arts & Sciences"


def _category(cat_id: str, name: str, description: str, eligibility: str) -> dict[str, Any]:
    return {
        "id": cat_id,
        "name": name,
        "description": description,
        "department": "editing",
        "eligibility": eligibility,
        "active": True,
    }


def _award(
    award_id: str,
    year: int,
    category: str,
    nominee: str,
    production: str,
    network: str,
    episode: str,
    status: str,
    source: str,
) -> dict[str, Any]:
    return {
        "id": award_id,
        "year": year,
        "category": category,
        "nominee": nominee,
        "production": production,
        "network": network,
        "episode": episode,
        "status": status,
        "organization": ACADEMY,
        "ceremonyType": "primetime",
        "verified": True,
        "source": source,
    }


EDITING_CATEGORIES: tuple[dict[str, Any], ...] = (
    _category(
        "picture-editing-drama",
        "Outstanding Picture Editing For A Drama Series",
        "Single-Camera Picture Editing for Drama Series",
        "Single-camera drama series episodes",
    ),
    _category(
        "picture-editing-comedy",
        "Outstanding Picture Editing For A Single-Camera Comedy Series",
        "Single-Camera Picture Editing for Comedy Series",
        "Single-camera comedy series episodes",
    ),
    _category(
        "picture-editing-limited",
        "Outstanding Picture Editing For A Limited Or Anthology Series Or Movie",
        "Picture Editing for Limited Series, Anthology Series, or Television Movie",
        "Limited series, anthology series, or TV movies",
    ),
    _category(
        "picture-editing-multi-camera-comedy",
        "Outstanding Picture Editing For A Multi-Camera Comedy Series",
        "Multi-Camera Picture Editing for Comedy Series",
        "Multi-camera comedy series episodes",
    ),
    _category(
        "picture-editing-nonfiction",
        "Outstanding Picture Editing For A Nonfiction Program",
        "Picture Editing for Nonfiction Programming",
        "Documentary and nonfiction programs",
    ),
    _category(
        "picture-editing-structured-reality",
        "Outstanding Picture Editing For A Structured Reality Or Competition Program",
        "Picture Editing for Structured Reality or Competition Programs",
        "Structured reality TV and competition shows",
    ),
    _category(
        "picture-editing-unstructured-reality",
        "Outstanding Picture Editing For An Unstructured Reality Program",
        "Picture Editing for Unstructured Reality Programs",
        "Unstructured reality TV programs",
    ),
    _category(
        "picture-editing-variety",
        "Outstanding Picture Editing For Variety Programming",
        "Picture Editing for Variety Shows and Specials",
        "Variety shows, talk shows, and variety specials",
    ),
)

_DRAMA = "Outstanding Picture Editing For A Drama Series"
_LIMITED = "Outstanding Picture Editing For A Limited Or Anthology Series Or Movie"
_TA = "televisionacademy.com"

EMMY_AWARDS: tuple[dict[str, Any], ...] = (
    _award("emmy-2024-drama-shogun", 2024, _DRAMA, "Maria Gonzales", "Shōgun",
           "FX", "A Dream Of A Dream", "won", _TA),
    _award("emmy-2024-drama-shogun-2", 2024, _DRAMA, "Aika Miyake", "Shōgun",
           "FX", "A Dream Of A Dream", "won", _TA),
    _award("emmy-2024-drama-fallout-1", 2024, _DRAMA, "Ali Comperchio", "Fallout",
           "Prime Video", "The End", "nominated", _TA),
    _award("emmy-2024-drama-fallout-2", 2024, _DRAMA, "Yoni Reiss", "Fallout",
           "Prime Video", "The Ghouls", "nominated", _TA),
    _award("emmy-2023-comedy-bear", 2023,
           "Outstanding Picture Editing For A Single-Camera Comedy Series",
           "Joanna Naugle", "The Bear", "FX", "System", "won", "emmys.com"),
    _award("emmy-2023-limited-beef", 2023, _LIMITED, "Nat Fuller", "Beef",
           "Netflix", "Figures Of Light", "won", "emmys.com"),
    _award("emmy-2023-limited-beef-2", 2023, _LIMITED, "Laura Zempel", "Beef",
           "Netflix", "Figures Of Light", "won", "emmys.com"),
    _award("emmy-2023-variety-black-lady", 2023,
           "Outstanding Picture Editing For Variety Programming",
           "Stephanie Filo", "A Black Lady Sketch Show", "HBO Max",
           "My Love Language Is Words Of Defamation", "won", "emmys.com"),
    _award("emmy-2022-comedy-barry", 2022,
           "Outstanding Single-Camera Picture Editing For A Comedy Series",
           "Ali Greer", "Barry", "HBO/HBO Max", "starting now", "won", "emmys.com"),
    _award("emmy-2022-unstructured-reality-love-spectrum", 2022,
           "Outstanding Picture Editing For An Unstructured Reality Program",
           "Rachel Grierson-Johns", "Love On The Spectrum", "Netflix",
           "Episode 1", "won", "emmys.com"),
)


async def load_emmy_reference(store: DocumentStore) -> int:
    """Write categories and awards; return the number of awards written."""
    batch = store.batch()
    for category in EDITING_CATEGORIES:
        batch.set(
            Collections.EMMY_CATEGORIES,
            category["id"],
            {**category, "createdAt": SERVER_TIMESTAMP, "updatedAt": SERVER_TIMESTAMP},
        )
    for award in EMMY_AWARDS:
        batch.set(
            Collections.EMMY_AWARDS,
            award["id"],
            {**award, "createdAt": SERVER_TIMESTAMP, "updatedAt": SERVER_TIMESTAMP},
        )
    await batch.commit()
    logger.info(
        "Emmy reference data loaded: %d categories, %d awards",
        len(EDITING_CATEGORIES), len(EMMY_AWARDS),
    )
    return len(EMMY_AWARDS)

