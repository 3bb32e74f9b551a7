"""SQLite (aiosqlite) engine with the CRM tables seeded for two principals."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from crm_search.infrastructure.persistence.database import Base
from crm_search.infrastructure.persistence.models import (
    Activity,
    Campaign,
    Contact,
    Deal,
    Form,
    FormSubmission,
    KnowledgeMap,
    KnowledgeNode,
    KnowledgeNote,
    Lead,
    Opportunity,
)

ALICE = "alice"
BOB = "bob"


def _rows(owner: str, word: str) -> list:
    o = {"user_id": owner}
    return [
        Lead(name=f"{word} Corp", email=f"buyer@{word.lower()}.test", phone="555-0100", status="QUALIFIED", value=1000, **o),
        Lead(name=f"{word} Corp West", company=word, status="NEW", **o),
        Contact(name=f"Jane {word}", email=f"jane@{word.lower()}.test", position="CTO", **o),
        Campaign(name=f"{word} outreach", subject="Hello", status="active", sent_count=10, **o),
        KnowledgeNode(label=f"{word} pricing", type="concept", tags=["pricing"], **o),
        KnowledgeMap(name=f"{word} map", description="accounts", **o),
        KnowledgeNote(title=f"{word} call", content="notes", starred=True, **o),
        Opportunity(name=f"{word} renewal", company=word, value=2500.5, stage="negotiation", probability=60, **o),
        Activity(title=f"Call {word}", type="call", description="renewal", **o),
        Form(id=f"form-{owner}", name=f"{word} demo form", status="published", **o),
        FormSubmission(form_id=f"form-{owner}", **o),
        FormSubmission(form_id=f"form-{owner}", **o),
        Deal(name=f"{word} deal", amount=800, status="WON", **o),
        Deal(name=f"{word} open deal", amount=300, status="OPEN", **o),
    ]


@pytest.fixture
async def session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    """Both principals use the same company word so only user_id separates them.

    File-backed so concurrent sessions get their own connections.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'crm.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all(_rows(ALICE, "Acme"))
        session.add_all(_rows(BOB, "Acme"))
        session.add(Lead(name="100% match_here", user_id=ALICE))
        session.add(Lead(name="1000 matchXhere", user_id=ALICE))
        await session.commit()
    yield factory
    await engine.dispose()
