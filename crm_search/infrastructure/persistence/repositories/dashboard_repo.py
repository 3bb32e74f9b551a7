"""Dashboard data source: fresh per-tier aggregates for one principal.

Each tier opens its own session (tiers are fetched concurrently) and
returns plain JSON values so the payload can be cached as-is.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from crm_search.application.dtos.dashboard import TierPayload
from crm_search.core.constants import (
    RECENT_ACTIVITIES_LIMIT,
    RECENT_LEADS_LIMIT,
    TIME_RANGE_DELTAS,
)
from crm_search.domain.enums import CacheTier
from crm_search.infrastructure.persistence.models import (
    Activity,
    Campaign,
    Contact,
    Deal,
    Form,
    FormSubmission,
    Lead,
    Opportunity,
)
from crm_search.shared.telemetry.tracing import traced
from crm_search.shared.utils.datetime import start_of_utc_day, utc_now

DEAL_OPEN = "OPEN"
DEAL_WON = "WON"
LEAD_QUALIFIED = "QUALIFIED"
CAMPAIGN_ACTIVE = "active"
FORM_PUBLISHED = "published"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _money(value: Any) -> float:
    return round(float(value or 0), 2)


class DashboardRepository:
    """Read-only aggregates behind the realtime, hourly and daily tiers."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def fetch_tier(
        self, tier: CacheTier, principal_id: str, time_range: str
    ) -> TierPayload:
        """Return the fresh payload for tier. Raises on data-source failure."""
        if tier is CacheTier.REALTIME:
            return await self.fetch_realtime(principal_id)
        if tier is CacheTier.HOURLY:
            return await self.fetch_hourly(principal_id, time_range)
        return await self.fetch_daily(principal_id, time_range)

    async def ping(self) -> bool:
        """Run SELECT 1; False when the database is unreachable."""
        try:
            async with self.session_factory() as session:
                await session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            return False
        return True

    @staticmethod
    async def _count(session: AsyncSession, model: type[Any], principal_id: str, *criteria: Any) -> int:
        stmt = (
            select(func.count())
            .select_from(model)
            .where(model.user_id == principal_id, *criteria)
        )
        return int((await session.execute(stmt)).scalar_one() or 0)

    @staticmethod
    async def _sum(
        session: AsyncSession,
        column: Any,
        model: type[Any],
        principal_id: str,
        *criteria: Any,
    ) -> float:
        stmt = select(func.coalesce(func.sum(column), 0)).where(
            model.user_id == principal_id, *criteria
        )
        return _money((await session.execute(stmt)).scalar_one())

    @traced("dashboard.tier.realtime")
    async def fetch_realtime(self, principal_id: str) -> TierPayload:
        """Recent leads/activities, open deals and today's counters."""
        today = start_of_utc_day()
        async with self.session_factory() as session:
            leads = (
                await session.execute(
                    select(
                        Lead.id,
                        Lead.name,
                        Lead.email,
                        Lead.company,
                        Lead.status,
                        Lead.value,
                        Lead.created_at,
                    )
                    .where(Lead.user_id == principal_id)
                    .order_by(Lead.created_at.desc(), Lead.id)
                    .limit(RECENT_LEADS_LIMIT)
                )
            ).mappings().all()
            activities = (
                await session.execute(
                    select(
                        Activity.id,
                        Activity.type,
                        Activity.description,
                        Activity.created_at,
                        Activity.lead_id,
                        Activity.contact_id,
                    )
                    .where(Activity.user_id == principal_id)
                    .order_by(Activity.created_at.desc(), Activity.id)
                    .limit(RECENT_ACTIVITIES_LIMIT)
                )
            ).mappings().all()
            active_deals = await self._count(
                session, Deal, principal_id, Deal.status == DEAL_OPEN
            )
            leads_today = await self._count(
                session, Lead, principal_id, Lead.created_at >= today
            )
            activities_today = await self._count(
                session, Activity, principal_id, Activity.created_at >= today
            )
        return {
            "recentLeads": [
                {
                    "id": row["id"],
                    "name": row["name"],
                    "email": row["email"],
                    "company": row["company"],
                    "status": row["status"],
                    "value": _money(row["value"]),
                    "createdAt": _iso(row["created_at"]),
                }
                for row in leads
            ],
            "recentActivities": [
                {
                    "id": row["id"],
                    "type": row["type"],
                    "description": row["description"],
                    "createdAt": _iso(row["created_at"]),
                    "leadId": row["lead_id"],
                    "contactId": row["contact_id"],
                }
                for row in activities
            ],
            "activeDeals": active_deals,
            "todayStats": {"leads": leads_today, "activities": activities_today},
        }

    @traced("dashboard.tier.hourly")
    async def fetch_hourly(self, principal_id: str, time_range: str) -> TierPayload:
        """Sales and marketing metrics for rows created within time_range."""
        since = utc_now() - TIME_RANGE_DELTAS[time_range]
        async with self.session_factory() as session:
            leads_total = await self._count(
                session, Lead, principal_id, Lead.created_at >= since
            )
            leads_qualified = await self._count(
                session,
                Lead,
                principal_id,
                Lead.created_at >= since,
                Lead.status == LEAD_QUALIFIED,
            )
            opp_total = await self._count(
                session, Opportunity, principal_id, Opportunity.created_at >= since
            )
            pipeline = await self._sum(
                session,
                Opportunity.value,
                Opportunity,
                principal_id,
                Opportunity.created_at >= since,
            )
            deals_total = await self._count(
                session, Deal, principal_id, Deal.created_at >= since
            )
            deals_won = await self._count(
                session,
                Deal,
                principal_id,
                Deal.created_at >= since,
                Deal.status == DEAL_WON,
            )
            revenue = await self._sum(
                session,
                Deal.amount,
                Deal,
                principal_id,
                Deal.created_at >= since,
                Deal.status == DEAL_WON,
            )
            forms_total = await self._count(
                session, Form, principal_id, Form.created_at >= since
            )
            submissions = await self._count(
                session, FormSubmission, principal_id, FormSubmission.created_at >= since
            )
            campaigns_total = await self._count(
                session, Campaign, principal_id, Campaign.created_at >= since
            )
            campaigns_active = await self._count(
                session,
                Campaign,
                principal_id,
                Campaign.created_at >= since,
                Campaign.status == CAMPAIGN_ACTIVE,
            )
            stage_rows = (
                await session.execute(
                    select(Opportunity.stage, func.count())
                    .where(
                        Opportunity.user_id == principal_id,
                        Opportunity.created_at >= since,
                    )
                    .group_by(Opportunity.stage)
                )
            ).all()
        return {
            "sales": {
                "leads": {"total": leads_total, "qualified": leads_qualified},
                "opportunities": {"total": opp_total, "pipelineValue": pipeline},
                "deals": {"total": deals_total, "won": deals_won, "revenue": revenue},
            },
            "marketing": {
                "forms": {"total": forms_total, "submissions": submissions},
                "campaigns": {"total": campaigns_total, "active": campaigns_active},
            },
            "opportunities": {
                "byStage": {stage: int(count) for stage, count in stage_rows}
            },
        }

    @traced("dashboard.tier.daily")
    async def fetch_daily(self, principal_id: str, time_range: str) -> TierPayload:
        """All-time overview counts; submissions and profit/loss within time_range."""
        since = utc_now() - TIME_RANGE_DELTAS[time_range]
        async with self.session_factory() as session:
            forms_total = await self._count(session, Form, principal_id)
            forms_published = await self._count(
                session, Form, principal_id, Form.status == FORM_PUBLISHED
            )
            submissions_total = await self._count(session, FormSubmission, principal_id)
            submissions = await self._count(
                session, FormSubmission, principal_id, FormSubmission.created_at >= since
            )
            contacts = await self._count(session, Contact, principal_id)
            leads = await self._count(session, Lead, principal_id)
            opportunities = await self._count(session, Opportunity, principal_id)
            deals = await self._count(session, Deal, principal_id)
            deals_won = await self._count(
                session,
                Deal,
                principal_id,
                Deal.status == DEAL_WON,
                Deal.created_at >= since,
            )
            campaigns = await self._count(session, Campaign, principal_id)
            revenue = await self._sum(
                session,
                Deal.amount,
                Deal,
                principal_id,
                Deal.status == DEAL_WON,
                Deal.created_at >= since,
            )
            pipeline = await self._sum(
                session, Opportunity.value, Opportunity, principal_id
            )
        return {
            "overview": {
                "forms": {"total": forms_total, "submissions": submissions_total},
                "contacts": {"total": contacts},
                "leads": {"total": leads},
                "opportunities": {"total": opportunities},
                "deals": {"total": deals},
                "marketing": {"campaigns": campaigns},
            },
            "forms": {
                "total": forms_total,
                "published": forms_published,
                "submissions": submissions,
            },
            "profitLoss": {
                "revenue": revenue,
                "dealsWon": deals_won,
                "pipelineValue": pipeline,
            },
        }
