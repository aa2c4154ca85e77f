#!/usr/bin/env python3
"""Load the built-in English library into the database (skips existing slugs)."""
import os
import sys

# Add the app directory to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from viafidei_app.content.domains import DOMAINS
from viafidei_app.content.library import BUILTIN_LANGUAGE, builtin_entries
from viafidei_app.database import get_db_session, get_engine, init_database


def seed_content():
    print("🚀 Seeding Via Fidei content...")
    print(f"📡 Using database at: {get_engine().url}")
    init_database()

    with get_db_session() as session:
        for name, spec in DOMAINS.items():
            created = 0
            for entry in builtin_entries(name):
                exists = session.query(spec.model).filter_by(
                    slug=entry['slug'], language=BUILTIN_LANGUAGE
                ).first()
                if exists:
                    continue
                row = spec.model(
                    language=BUILTIN_LANGUAGE,
                    slug=entry['slug'],
                    tags=list(entry.get('tags', [])),
                    source=entry.get('source'),
                    source_url=entry.get('source_url'),
                    source_attribution=entry.get('source_attribution'),
                    is_active=True,
                )
                setattr(row, spec.title_attr, entry['title'])
                setattr(row, spec.body_attr, entry['body'])
                for public_key, attr in spec.extra_columns.items():
                    setattr(row, attr, entry.get('extra', {}).get(public_key))
                session.add(row)
                created += 1
            print(f"✅ {name}: {created} created")


if __name__ == "__main__":
    seed_content()
