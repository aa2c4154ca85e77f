"""
================================================================================
Via Fidei - Database Models
================================================================================
SQLAlchemy models for the curated content library.

  - Prayer: a prayer text in one language (category, tags, attribution).
  - Saint: a saint with biography, feast day and patronages.
  - Apparition: a Marian apparition ("Our Lady of ...") with its story.
  - User: Flask-Login user carrying an explicit language override.

Every content row is scoped to a single language; (slug, language) is unique
per table. Rows are created and edited by the admin tooling only, the search
and listing code reads them.
================================================================================
"""

from datetime import datetime, timezone
import uuid

from sqlalchemy import (
    Column, String, Integer, DateTime, Boolean, Text, JSON,
    UniqueConstraint, Index
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.ext.declarative import declared_attr
from flask_login import UserMixin as FlaskLoginUserMixin

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)

# =============================================================================
# MIXINS
# =============================================================================

class TimestampMixin:
    """Adds created_at and updated_at timestamps to models."""
    @declared_attr
    def created_at(cls):
        return Column(DateTime, default=_now, nullable=False)

    @declared_attr
    def updated_at(cls):
        return Column(DateTime, default=_now, onupdate=_now, nullable=False, index=True)


class ContentMixin(TimestampMixin):
    """Columns shared by every curated content table."""
    @declared_attr
    def id(cls):
        return Column(String(36), primary_key=True, default=_uuid)

    @declared_attr
    def language(cls):
        return Column(String(8), nullable=False, index=True)

    @declared_attr
    def slug(cls):
        return Column(String(200), nullable=False)

    @declared_attr
    def tags(cls):
        return Column(JSON, default=list, nullable=False)

    @declared_attr
    def source(cls):
        return Column(String(255))

    @declared_attr
    def source_url(cls):
        return Column(String(500))

    @declared_attr
    def source_attribution(cls):
        return Column(String(500))

    @declared_attr
    def is_active(cls):
        return Column(Boolean, default=True, nullable=False)

# =============================================================================
# USER
# =============================================================================

class User(Base, FlaskLoginUserMixin, TimestampMixin):
    """Site user. Only the language preference matters to the content API."""
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(100))
    language_override = Column(String(8), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'display_name': self.display_name,
            'language_override': self.language_override,
        }

# =============================================================================
# CONTENT
# =============================================================================

class Prayer(Base, ContentMixin):
    __tablename__ = 'prayers'
    __table_args__ = (
        UniqueConstraint('slug', 'language', name='uq_prayers_slug_language'),
        Index('ix_prayers_language_active', 'language', 'is_active'),
    )

    title = Column(String(300), nullable=False, index=True)
    content = Column(Text, nullable=False)
    category = Column(String(50))


class Saint(Base, ContentMixin):
    __tablename__ = 'saints'
    __table_args__ = (
        UniqueConstraint('slug', 'language', name='uq_saints_slug_language'),
        Index('ix_saints_language_active', 'language', 'is_active'),
    )

    name = Column(String(300), nullable=False, index=True)
    biography = Column(Text, nullable=False)
    feast_day = Column(DateTime, nullable=True)
    patronages = Column(JSON, default=list, nullable=False)
    canonization_status = Column(String(100))
    official_prayer = Column(Text)
    image_url = Column(String(500))


class Apparition(Base, ContentMixin):
    __tablename__ = 'apparitions'
    __table_args__ = (
        UniqueConstraint('slug', 'language', name='uq_apparitions_slug_language'),
        Index('ix_apparitions_language_active', 'language', 'is_active'),
    )

    title = Column(String(300), nullable=False, index=True)
    story = Column(Text, nullable=False)
    location = Column(String(300))
    first_year = Column(Integer)
    feast_day = Column(DateTime, nullable=True)
    approval_note = Column(Text)
    official_prayer = Column(Text)
    image_url = Column(String(500))
