"""
Drama statistics

Pure aggregation functions over dramas (anything with ``created_at`` and
``participants``, each participant carrying ``id``, ``name`` and ``icon``)
plus a small service that loads the data and calls them.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session, selectinload

from drama_tracker.core.utils import to_utc_naive, utc_now
from drama_tracker.models.drama import Drama
from drama_tracker.models.person import Person
from drama_tracker.schemas.statistics_schemas import (
    LeaderboardEntry,
    MonthlyDramaQueen,
    PersonInvolvement,
    StatisticsResponse,
    WeeklyCount,
)

logger = logging.getLogger(__name__)


def week_start(timestamp: datetime) -> date:
    """Monday of the week containing ``timestamp``"""
    day = to_utc_naive(timestamp).date()
    return day - timedelta(days=day.weekday())


def month_key(timestamp: datetime) -> str:
    """Calendar month as 'YYYY-MM'"""
    return to_utc_naive(timestamp).strftime("%Y-%m")


def month_label(key: str) -> str:
    """'2025-01' -> 'January 2025'"""
    year, month = key.split("-")
    return date(int(year), int(month), 1).strftime("%B %Y")


def _count_involvement(dramas: Iterable) -> Dict[int, dict]:
    """person_id -> {name, icon, count}, in order of first appearance"""
    counts: Dict[int, dict] = {}
    for drama in dramas:
        for person in drama.participants:
            entry = counts.get(person.id)
            if entry:
                entry["count"] += 1
            else:
                counts[person.id] = {
                    "name": person.name,
                    "icon": getattr(person, "icon", None),
                    "count": 1,
                }
    return counts


def group_by_week(dramas: Iterable) -> List[WeeklyCount]:
    """Count dramas per Monday-start week; empty weeks are left out"""
    weeks: Dict[date, int] = {}
    for drama in dramas:
        key = week_start(drama.created_at)
        weeks[key] = weeks.get(key, 0) + 1

    return [
        WeeklyCount(week_start=start, count=count)
        for start, count in sorted(weeks.items())
    ]


def calculate_person_involvement(dramas: Iterable) -> List[PersonInvolvement]:
    """Lifetime drama count per person, most involved first.

    Only people that appear in at least one drama are listed. Equal counts
    keep the order in which the people were first encountered.
    """
    counts = _count_involvement(dramas)
    result = [
        PersonInvolvement(person_id=person_id, name=data["name"], icon=data["icon"], count=data["count"])
        for person_id, data in counts.items()
    ]
    result.sort(key=lambda entry: entry.count, reverse=True)
    return result


def calculate_monthly_drama_queens(
    dramas: Iterable,
    now: Optional[datetime] = None,
) -> List[MonthlyDramaQueen]:
    """Pick the most involved person of every month that had dramas.

    On a tie the first person to reach the top count wins. Newest month first.
    """
    current_month = month_key(now or utc_now())

    by_month: Dict[str, list] = {}
    for drama in dramas:
        by_month.setdefault(month_key(drama.created_at), []).append(drama)

    winners = []
    for key, month_dramas in by_month.items():
        max_count = 0
        winner = None
        for person_id, data in _count_involvement(month_dramas).items():
            if data["count"] > max_count:
                max_count = data["count"]
                winner = (person_id, data)

        # a month whose dramas have no participants has no queen
        if winner is None:
            continue

        person_id, data = winner
        winners.append(MonthlyDramaQueen(
            month=key,
            month_label=month_label(key),
            person_id=person_id,
            name=data["name"],
            icon=data["icon"],
            count=data["count"],
            is_current_month=key == current_month,
        ))

    winners.sort(key=lambda queen: queen.month, reverse=True)
    return winners


def assign_competition_ranks(counts: Sequence[int]) -> List[int]:
    """Ranks for counts already sorted descending: [5, 5, 3, 1] -> [1, 1, 3, 4]"""
    ranks: List[int] = []
    for position, count in enumerate(counts):
        if position > 0 and count == counts[position - 1]:
            ranks.append(ranks[-1])
        else:
            ranks.append(position + 1)
    return ranks


def calculate_current_month_leaderboard(
    dramas: Iterable,
    people: Iterable,
    now: Optional[datetime] = None,
) -> List[LeaderboardEntry]:
    """Rank the whole roster by drama count for the current calendar month.

    Everyone in ``people`` gets an entry, including people with no dramas
    this month. Sorted by count descending, then name.
    """
    current_month = month_key(now or utc_now())
    this_month = [d for d in dramas if month_key(d.created_at) == current_month]
    counts = _count_involvement(this_month)

    rows = sorted(
        (
            (counts[p.id]["count"] if p.id in counts else 0, p)
            for p in people
        ),
        key=lambda row: (-row[0], row[1].name),
    )
    ranks = assign_competition_ranks([count for count, _ in rows])

    return [
        LeaderboardEntry(
            person_id=person.id,
            name=person.name,
            icon=getattr(person, "icon", None),
            count=count,
            rank=rank,
        )
        for (count, person), rank in zip(rows, ranks)
    ]


def calculate_statistics(
    dramas: Sequence,
    people: Optional[Sequence] = None,
    now: Optional[datetime] = None,
) -> StatisticsResponse:
    """Bundle every statistic; the leaderboard needs the roster"""
    now = now or utc_now()
    return StatisticsResponse(
        total_dramas=len(dramas),
        per_person=calculate_person_involvement(dramas),
        per_week=group_by_week(dramas),
        monthly_queens=calculate_monthly_drama_queens(dramas, now=now),
        leaderboard=calculate_current_month_leaderboard(dramas, people, now=now) if people is not None else [],
    )


class AnalyticsService:
    """Loads dramas and the roster, then computes statistics"""

    def __init__(self, db: Session):
        self.db = db

    async def get_statistics(self, now: Optional[datetime] = None) -> StatisticsResponse:
        """Statistics over the full drama history"""
        dramas = (
            self.db.query(Drama)
            .options(selectinload(Drama.participants))
            .order_by(Drama.created_at.desc())
            .all()
        )
        people = self.db.query(Person).order_by(Person.name).all()

        stats = calculate_statistics(dramas, people, now=now)
        logger.debug("Computed statistics over %d dramas and %d people", len(dramas), len(people))
        return stats
