"""
Canonical built-in library.

Hand-authored records served when neither the database nor an external feed
has content for a language. Only English is shipped; every other language
gets an empty list.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from .domains import APPARITIONS, PRAYERS, SAINTS, get_domain
from .records import ContentRecord, ORIGIN_BUILTIN

BUILTIN_LANGUAGE = 'en'

# Built-ins carry no edit history; they are as fresh as the process.
LIBRARY_LOADED_AT = datetime.now(timezone.utc)

_TRADITIONAL = "Traditional Catholic prayer"

_PRAYERS: List[Dict[str, Any]] = [
    {
        'slug': 'our-father',
        'title': 'Our Father',
        'body': (
            "Our Father, who art in heaven, hallowed be thy name. Thy kingdom come, "
            "thy will be done, on earth as it is in heaven. Give us this day our daily "
            "bread, and forgive us our trespasses, as we forgive those who trespass "
            "against us, and lead us not into temptation, but deliver us from evil. Amen."
        ),
        'tags': ["lord's prayer", 'basic', 'daily'],
        'extra': {'category': 'CHRIST_CENTERED'},
        'source': _TRADITIONAL,
    },
    {
        'slug': 'hail-mary',
        'title': 'Hail Mary',
        'body': (
            "Hail Mary, full of grace, the Lord is with thee. Blessed art thou among "
            "women, and blessed is the fruit of thy womb, Jesus. Holy Mary, Mother of "
            "God, pray for us sinners, now and at the hour of our death. Amen."
        ),
        'tags': ['rosary', 'marian', 'daily'],
        'extra': {'category': 'MARIAN'},
        'source': _TRADITIONAL,
    },
    {
        'slug': 'glory-be',
        'title': 'Glory Be',
        'body': (
            "Glory be to the Father, and to the Son, and to the Holy Spirit, as it was "
            "in the beginning, is now, and ever shall be, world without end. Amen."
        ),
        'tags': ['doxology', 'rosary', 'basic'],
        'extra': {'category': 'TRINITARIAN'},
        'source': _TRADITIONAL,
    },
    {
        'slug': 'act-of-contrition-simple',
        'title': 'Act of Contrition',
        'body': (
            "My God, I am sorry for my sins with all my heart. In choosing to do wrong "
            "and failing to do good, I have sinned against you whom I should love above "
            "all things. I firmly intend, with your help, to do penance, to sin no more, "
            "and to avoid whatever leads me to sin. Our Savior Jesus Christ suffered and "
            "died for us. In his name, my God, have mercy. Amen."
        ),
        'tags': ['confession', 'penance'],
        'extra': {'category': 'SACRAMENTAL'},
        'source': 'USCCB sample text',
        'source_attribution': 'Text adapted for catechetical use',
    },
    {
        'slug': 'apostles-creed',
        'title': "Apostles' Creed",
        'body': (
            "I believe in God, the Father almighty, Creator of heaven and earth, and in "
            "Jesus Christ, his only Son, our Lord, who was conceived by the Holy Spirit, "
            "born of the Virgin Mary, suffered under Pontius Pilate, was crucified, died "
            "and was buried; he descended into hell; on the third day he rose again from "
            "the dead; he ascended into heaven, and is seated at the right hand of God "
            "the Father almighty; from there he will come to judge the living and the "
            "dead. I believe in the Holy Spirit, the holy catholic Church, the communion "
            "of saints, the forgiveness of sins, the resurrection of the body, and life "
            "everlasting. Amen."
        ),
        'tags': ['creed', 'rosary', 'basic'],
        'extra': {'category': 'CREED'},
        'source': _TRADITIONAL,
    },
    {
        'slug': 'hail-holy-queen',
        'title': 'Hail, Holy Queen',
        'body': (
            "Hail, holy Queen, Mother of mercy, our life, our sweetness and our hope. "
            "To thee do we cry, poor banished children of Eve. To thee do we send up our "
            "sighs, mourning and weeping in this valley of tears. Turn then, most gracious "
            "advocate, thine eyes of mercy toward us, and after this our exile show unto "
            "us the blessed fruit of thy womb, Jesus. O clement, O loving, O sweet Virgin "
            "Mary. Amen."
        ),
        'tags': ['salve regina', 'rosary', 'marian'],
        'extra': {'category': 'MARIAN'},
        'source': _TRADITIONAL,
    },
    {
        'slug': 'memorare',
        'title': 'Memorare',
        'body': (
            "Remember, O most gracious Virgin Mary, that never was it known that anyone "
            "who fled to thy protection, implored thy help, or sought thine intercession "
            "was left unaided. Inspired by this confidence, I fly unto thee, O Virgin of "
            "virgins, my Mother. To thee do I come, before thee I stand, sinful and "
            "sorrowful. O Mother of the Word Incarnate, despise not my petitions, but in "
            "thy mercy hear and answer me. Amen."
        ),
        'tags': ['marian', 'intercession'],
        'extra': {'category': 'MARIAN'},
        'source': 'Attributed to Saint Bernard of Clairvaux',
    },
    {
        'slug': 'prayer-to-saint-michael',
        'title': 'Prayer to Saint Michael the Archangel',
        'body': (
            "Saint Michael the Archangel, defend us in battle. Be our protection against "
            "the wickedness and snares of the devil. May God rebuke him, we humbly pray; "
            "and do thou, O Prince of the heavenly host, by the power of God, cast into "
            "hell Satan and all the evil spirits who prowl about the world seeking the "
            "ruin of souls. Amen."
        ),
        'tags': ['protection', 'angels'],
        'extra': {'category': 'SAINTS_AND_ANGELS'},
        'source': 'Pope Leo XIII',
    },
    {
        'slug': 'angel-of-god',
        'title': 'Angel of God',
        'body': (
            "Angel of God, my guardian dear, to whom God's love commits me here, ever "
            "this day be at my side, to light and guard, to rule and guide. Amen."
        ),
        'tags': ['guardian angel', 'angels', 'children'],
        'extra': {'category': 'SAINTS_AND_ANGELS'},
        'source': _TRADITIONAL,
    },
]

_HAGIOGRAPHY = "General hagiographical summary"

_SAINTS: List[Dict[str, Any]] = [
    {
        'slug': 'st-francis-of-assisi',
        'title': 'Saint Francis of Assisi',
        'body': (
            "Saint Francis of Assisi embraced radical poverty and joyful trust in God. "
            "He renewed the Church through a life of simplicity, fraternity, and love "
            "for all creation."
        ),
        'tags': ['poverty', 'creation', 'franciscan'],
        'extra': {
            'feastDay': datetime(2025, 10, 4, tzinfo=timezone.utc),
            'patronages': ['animals', 'peace', 'creation'],
            'canonizationStatus': 'Canonized',
            'officialPrayer': (
                "Most High and glorious God, enlighten the darkness of my heart. Give me "
                "right faith, sure hope, and perfect charity, sense and knowledge, Lord, "
                "that I may carry out your holy and true command. Amen."
            ),
            'imageUrl': '/images/saints/st-francis-of-assisi.jpg',
        },
        'source': _HAGIOGRAPHY,
        'source_attribution': 'Adapted from traditional biographies',
    },
    {
        'slug': 'st-therese-of-lisieux',
        'title': 'Saint Thérèse of Lisieux',
        'body': (
            "Saint Thérèse of the Child Jesus lived a hidden life in a Carmelite "
            "monastery and taught the Little Way of spiritual childhood, trust, and "
            "love in small things."
        ),
        'tags': ['little way', 'trust', 'carmelite'],
        'extra': {
            'feastDay': datetime(2025, 10, 1, tzinfo=timezone.utc),
            'patronages': ['missions', 'priests', 'trust'],
            'canonizationStatus': 'Doctor of the Church',
            'officialPrayer': (
                "O Lord, who said, unless you become like little children, you shall not "
                "enter the kingdom of heaven, grant us to follow Saint Thérèse in humble "
                "trust and generous love."
            ),
            'imageUrl': '/images/saints/st-therese-of-lisieux.jpg',
        },
        'source': _HAGIOGRAPHY,
        'source_attribution': 'Adapted from Story of a Soul',
    },
    {
        'slug': 'st-joseph',
        'title': 'Saint Joseph',
        'body': (
            "Saint Joseph, spouse of the Virgin Mary and foster father of Jesus, "
            "protected the Holy Family with quiet obedience and the work of his hands."
        ),
        'tags': ['holy family', 'work', 'fatherhood'],
        'extra': {
            'feastDay': datetime(2025, 3, 19, tzinfo=timezone.utc),
            'patronages': ['workers', 'fathers', 'the universal church'],
            'canonizationStatus': 'Canonized',
            'officialPrayer': None,
            'imageUrl': '/images/saints/st-joseph.jpg',
        },
        'source': _HAGIOGRAPHY,
    },
    {
        'slug': 'st-augustine-of-hippo',
        'title': 'Saint Augustine of Hippo',
        'body': (
            "Saint Augustine, bishop of Hippo, turned from a restless youth to Christ "
            "through the prayers of his mother Monica, and wrote the Confessions and "
            "the City of God."
        ),
        'tags': ['conversion', 'doctor of the church', 'bishop'],
        'extra': {
            'feastDay': datetime(2025, 8, 28, tzinfo=timezone.utc),
            'patronages': ['theologians', 'brewers'],
            'canonizationStatus': 'Doctor of the Church',
            'officialPrayer': None,
            'imageUrl': '/images/saints/st-augustine.jpg',
        },
        'source': _HAGIOGRAPHY,
    },
]

_APPARITIONS: List[Dict[str, Any]] = [
    {
        'slug': 'our-lady-of-fatima',
        'title': 'Our Lady of Fátima',
        'body': (
            "In 1917, the Blessed Virgin Mary appeared to three shepherd children in "
            "Fátima. She called for prayer, penance, and devotion to her Immaculate "
            "Heart, and entrusted messages for the Church and the world."
        ),
        'tags': ['rosary', 'penance', 'immaculate heart'],
        'extra': {
            'location': 'Fátima, Portugal',
            'firstYear': 1917,
            'feastDay': datetime(2025, 5, 13, tzinfo=timezone.utc),
            'approvalNote': (
                "The apparitions of Our Lady at Fátima were approved by the Bishop of "
                "Leiria in 1930."
            ),
            'officialPrayer': (
                "O my Jesus, forgive us our sins, save us from the fires of hell, lead all "
                "souls to heaven, especially those who are most in need of your mercy."
            ),
            'imageUrl': '/images/apparitions/our-lady-of-fatima.jpg',
        },
        'source': 'General summary of the Fátima apparitions',
        'source_attribution': 'Adapted from public domain sources',
    },
    {
        'slug': 'our-lady-of-guadalupe',
        'title': 'Our Lady of Guadalupe',
        'body': (
            "In 1531, the Virgin Mary appeared to Saint Juan Diego on the hill of "
            "Tepeyac and left her image on his tilma, asking that a church be built "
            "on that place."
        ),
        'tags': ['tilma', 'americas', 'juan diego'],
        'extra': {
            'location': 'Tepeyac, Mexico City, Mexico',
            'firstYear': 1531,
            'feastDay': datetime(2025, 12, 12, tzinfo=timezone.utc),
            'approvalNote': "Recognized by the Church; the basilica was raised in 1976.",
            'officialPrayer': None,
            'imageUrl': '/images/apparitions/our-lady-of-guadalupe.jpg',
        },
        'source': 'General summary of the Guadalupe apparitions',
    },
    {
        'slug': 'our-lady-of-lourdes',
        'title': 'Our Lady of Lourdes',
        'body': (
            "In 1858, the Virgin Mary appeared eighteen times to Bernadette Soubirous "
            "at the grotto of Massabielle and named herself the Immaculate Conception."
        ),
        'tags': ['healing', 'immaculate conception', 'grotto'],
        'extra': {
            'location': 'Lourdes, France',
            'firstYear': 1858,
            'feastDay': datetime(2025, 2, 11, tzinfo=timezone.utc),
            'approvalNote': "Approved by the Bishop of Tarbes in 1862.",
            'officialPrayer': None,
            'imageUrl': '/images/apparitions/our-lady-of-lourdes.jpg',
        },
        'source': 'General summary of the Lourdes apparitions',
    },
]

_LIBRARY: Dict[str, List[Dict[str, Any]]] = {
    PRAYERS: _PRAYERS,
    SAINTS: _SAINTS,
    APPARITIONS: _APPARITIONS,
}


class CanonicalLibrary:
    """Serves the built-in records as ``ContentRecord`` lists."""

    def __init__(self, entries: Dict[str, List[Dict[str, Any]]] = None,
                 language: str = BUILTIN_LANGUAGE):
        self.entries = _LIBRARY if entries is None else entries
        self.language = language

    def records(self, domain: str, language: str) -> List[ContentRecord]:
        get_domain(domain)  # reject unknown domains early
        if language != self.language:
            return []
        return [
            ContentRecord(
                domain=domain,
                id=f"builtin-{domain}-{language}-{index}",
                language=language,
                slug=entry['slug'],
                title=entry['title'],
                body=entry['body'],
                tags=list(entry.get('tags', [])),
                updated_at=LIBRARY_LOADED_AT,
                source=entry.get('source'),
                source_url=entry.get('source_url'),
                source_attribution=entry.get('source_attribution'),
                extra=dict(entry.get('extra', {})),
                origin=ORIGIN_BUILTIN,
            )
            for index, entry in enumerate(self.entries.get(domain, []))
        ]


def builtin_entries(domain: str) -> List[Dict[str, Any]]:
    """Raw library entries for a domain (used by the seed script)."""
    return _LIBRARY.get(domain, [])
