"""
Domain registry: how prayers, saints and apparitions differ.

Everything downstream (repository, feed normalization, scoring, public
projection) is driven by a ``DomainSpec`` rather than by per-domain code.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Type

from ..models import Apparition, Prayer, Saint
from .records import ContentRecord
from .scoring import ScoreWeights

PRAYERS = 'prayers'
SAINTS = 'saints'
APPARITIONS = 'apparitions'


@dataclass(frozen=True)
class DomainSpec:
    name: str
    kind: str
    noun: str
    model: Type[Any]
    # Model attribute and public key for the display string and main text
    title_attr: str
    body_attr: str
    # public key -> model attribute, for domain-only columns
    extra_columns: Dict[str, str]
    weights: ScoreWeights
    default_take: int
    # Extras matched by substring / exact membership in search
    text_search_fields: Tuple[str, ...] = ()
    list_search_fields: Tuple[str, ...] = ()
    # Feed keys accepted for title and body, first non-empty wins
    title_aliases: Tuple[str, ...] = ('title', 'name')
    body_aliases: Tuple[str, ...] = ()
    max_take: int = 100
    suggestion_extra: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def env_prefix(self) -> str:
        return self.name.upper()

    def public(self, record: ContentRecord) -> Dict[str, Any]:
        return record.to_public(title_key=self.title_attr, body_key=self.body_attr)

    def suggestion(self, record: ContentRecord) -> Dict[str, Any]:
        item = {
            'id': record.id,
            'title': record.title,
            'slug': record.slug,
        }
        for key in self.suggestion_extra:
            item[key] = record.extra.get(key)
        return item


DOMAINS: Dict[str, DomainSpec] = {
    PRAYERS: DomainSpec(
        name=PRAYERS,
        kind='prayer',
        noun='Prayer',
        model=Prayer,
        title_attr='title',
        body_attr='content',
        extra_columns={'category': 'category'},
        weights=ScoreWeights(
            exact_title=120, partial_title=80, tag=40,
            database_origin=12, fallback_origin=6,
            recency_max=20, recency_decay=0.5,
        ),
        default_take=20,
        body_aliases=('content', 'text', 'body'),
        suggestion_extra=('category',),
    ),
    SAINTS: DomainSpec(
        name=SAINTS,
        kind='saint',
        noun='Saint',
        model=Saint,
        title_attr='name',
        body_attr='biography',
        extra_columns={
            'feastDay': 'feast_day',
            'patronages': 'patronages',
            'canonizationStatus': 'canonization_status',
            'officialPrayer': 'official_prayer',
            'imageUrl': 'image_url',
        },
        weights=ScoreWeights(
            exact_title=115, partial_title=75, tag=30,
            database_origin=10, fallback_origin=5,
            recency_max=18, recency_decay=0.4,
            list_bonus={'patronages': 40},
        ),
        default_take=30,
        list_search_fields=('patronages',),
        title_aliases=('name', 'title'),
        body_aliases=('biography', 'bio', 'summary'),
    ),
    APPARITIONS: DomainSpec(
        name=APPARITIONS,
        kind='apparition',
        noun='Apparition',
        model=Apparition,
        title_attr='title',
        body_attr='story',
        extra_columns={
            'location': 'location',
            'firstYear': 'first_year',
            'feastDay': 'feast_day',
            'approvalNote': 'approval_note',
            'officialPrayer': 'official_prayer',
            'imageUrl': 'image_url',
        },
        weights=ScoreWeights(
            exact_title=110, partial_title=70, tag=35,
            database_origin=10, fallback_origin=5,
            recency_max=18, recency_decay=0.4,
        ),
        default_take=30,
        text_search_fields=('location',),
        body_aliases=('story', 'description', 'summary'),
    ),
}


def get_domain(name: str) -> DomainSpec:
    """Look up a domain, raising KeyError for unknown names."""
    return DOMAINS[name]
