"""Seed a local database with CRM rows for one or two dev principals.

Creates the tables (dev only; production tables belong to the main CRM),
inserts a small data set per principal and prints a bearer token for each
so search and dashboard can be exercised with curl.

Usage:
    python -m scripts.seed_dev_data [principal_id ...]

Requires: DATABASE_URL and SECRET_KEY (in env or .env at project root).
"""

from __future__ import annotations

import asyncio
import sys
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def _load_env() -> None:
    """Load .env from project root so get_settings() sees DATABASE_URL when run as script."""
    load_dotenv(_project_root() / ".env", override=True)


def _rows_for(principal_id: str) -> list:
    from crm_search.infrastructure.persistence.models import (
        Activity,
        Campaign,
        Contact,
        Deal,
        Form,
        KnowledgeMap,
        KnowledgeNode,
        KnowledgeNote,
        Lead,
        Opportunity,
    )
    from crm_search.shared.utils.datetime import utc_now

    owner = {"user_id": principal_id}
    form = Form(name="Acme Demo Request", description="Inbound demo form", status="published", **owner)
    return [
        Lead(name="Acme Corp", email="buyer@acme.test", company="Acme", phone="555-0100", status="QUALIFIED", value=12000, **owner),
        Lead(name="Acme Corp West", email="west@acme.test", company="Acme", status="NEW", value=4000, **owner),
        Lead(name="Globex", email="hank@globex.test", company="Globex", status="CONTACTED", **owner),
        Contact(name="Jane Acme", email="jane@acme.test", company="Acme", position="CTO", **owner),
        Contact(name="Bob Initech", company="Initech", phone="555-0199", **owner),
        Campaign(name="Acme Q3 Outreach", subject="Meet Acme", status="active", sent_count=420, **owner),
        KnowledgeNode(label="Acme pricing", type="concept", tags=["pricing", "acme"], **owner),
        KnowledgeMap(name="Acme account map", description="Stakeholders", **owner),
        KnowledgeNote(title="Call notes: Acme", content="Budget approved for Q4.", starred=True, tags=["calls"], **owner),
        Opportunity(name="Acme renewal", company="Acme", value=25000, stage="negotiation", probability=60, **owner),
        Opportunity(name="Globex pilot", company="Globex", value=5000, stage="prospecting", probability=20, **owner),
        Activity(title="Follow up with Acme", type="call", description="Discuss renewal", due_date=utc_now() + timedelta(days=2), **owner),
        form,
        Deal(name="Acme 2025", amount=18000, status="WON", **owner),
        Deal(name="Globex pilot", amount=5000, status="OPEN", **owner),
    ]


async def _seed(principal_ids: list[str]) -> None:
    from crm_search.infrastructure.persistence import database
    from crm_search.infrastructure.persistence.models import FormSubmission
    from crm_search.infrastructure.security.jwt import create_access_token

    session_factory = database.get_session_factory()
    async with database.engine.begin() as conn:
        await conn.run_sync(database.Base.metadata.create_all)

    for principal_id in principal_ids:
        async with session_factory() as session:
            rows = _rows_for(principal_id)
            session.add_all(rows)
            await session.flush()
            form = next(r for r in rows if r.__tablename__ == "forms")
            session.add_all(
                FormSubmission(form_id=form.id, user_id=principal_id) for _ in range(3)
            )
            await session.commit()
        token = create_access_token(principal_id, email=f"{principal_id}@example.test")
        print(f"Seeded {principal_id}. Token:\n  {token}")

    await database.dispose_engine()


def main() -> None:
    _load_env()
    principal_ids = sys.argv[1:] or ["dev-user-1", "dev-user-2"]
    asyncio.run(_seed(principal_ids))


if __name__ == "__main__":
    main()
