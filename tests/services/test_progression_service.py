import pytest
from datetime import datetime, timedelta
from fastapi import HTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from quild.core.config import settings
from quild.services.progress import progress_service
from quild.services.progression import progression_service

NOW = datetime(2026, 3, 10, 9, 30)


async def _ledger(db: Session, user_factory):
    user = user_factory()
    return await progress_service.ensure_progress(db, user)


@pytest.mark.asyncio
async def test_first_completion_records_points_time_and_cursor(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[3]])
    first, second = curriculum.lesson(0, 0, 0), curriculum.lesson(0, 0, 1)
    progress = await _ledger(db_session, user_factory)

    result = await progression_service.complete_lesson(db_session, progress, first.id, time_spent=25, now=NOW)

    assert result.already_completed is False
    assert result.points_earned == 10
    assert result.new_total_points == 10
    assert result.new_total_time_spent == 25
    assert result.new_streak == 1
    assert result.next_lesson.id == second.id

    db_session.refresh(progress)
    assert progress.completed_lesson_ids() == {first.id}
    assert progress.completed_lessons[0].time_spent == 25
    assert progress.completed_lessons[0].points_earned == 10
    assert progress.current_lesson_id == second.id
    assert progress.last_activity_date == NOW


@pytest.mark.asyncio
async def test_completing_twice_is_idempotent(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[2]])
    lesson = curriculum.lesson(0, 0, 0)
    progress = await _ledger(db_session, user_factory)

    await progression_service.complete_lesson(db_session, progress, lesson.id, now=NOW)
    db_session.refresh(progress)
    version_after_first = progress.version

    result = await progression_service.complete_lesson(db_session, progress, lesson.id, now=NOW + timedelta(days=1))

    assert result.already_completed is True
    assert result.points_earned == 0
    db_session.refresh(progress)
    assert progress.version == version_after_first
    assert progress.total_points == 10
    assert progress.current_streak == 1
    assert len(progress.completed_lessons) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("given, expected", [(None, 30), (0, 30), (45, 45)])
async def test_time_spent_falls_back_to_lesson_duration(db_session: Session, user_factory, curriculum_factory, given, expected):
    curriculum = curriculum_factory([[2]], duration=30)
    progress = await _ledger(db_session, user_factory)

    result = await progression_service.complete_lesson(
        db_session, progress, curriculum.lesson(0, 0, 0).id, time_spent=given, now=NOW
    )

    assert result.new_total_time_spent == expected


@pytest.mark.asyncio
async def test_streak_counts_consecutive_calendar_days(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[6]])
    lessons = curriculum.all_lessons()
    progress = await _ledger(db_session, user_factory)

    day_one = datetime(2026, 3, 10, 23, 50)
    steps = [
        (day_one, 1),
        (day_one + timedelta(minutes=5), 1),           # same day
        (datetime(2026, 3, 11, 0, 5), 2),              # next calendar day, only minutes later
        (datetime(2026, 3, 12, 18, 0), 3),
        (datetime(2026, 3, 15, 8, 0), 1),              # gap resets
    ]
    for lesson, (when, expected_streak) in zip(lessons, steps):
        result = await progression_service.complete_lesson(db_session, progress, lesson.id, now=when)
        assert result.new_streak == expected_streak

    db_session.refresh(progress)
    assert progress.current_streak == 1
    assert progress.longest_streak == 3
    assert progress.current_streak <= progress.longest_streak


@pytest.mark.asyncio
async def test_points_and_time_never_decrease(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[3, 2]])
    progress = await _ledger(db_session, user_factory)

    totals = []
    for offset, lesson in enumerate(curriculum.all_lessons()):
        result = await progression_service.complete_lesson(db_session, progress, lesson.id, now=NOW + timedelta(hours=offset))
        totals.append((result.new_total_points, result.new_total_time_spent))

    assert totals == sorted(totals)
    assert totals[-1] == (50, 150)


@pytest.mark.asyncio
async def test_week_and_phase_cascade(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[2, 1]], points=15, duration=20)
    week_one, week_two = curriculum.weeks[0]
    phase = curriculum.phases[0]
    progress = await _ledger(db_session, user_factory)

    await progression_service.complete_lesson(db_session, progress, curriculum.lesson(0, 0, 0).id, time_spent=5, now=NOW)
    db_session.refresh(progress)
    assert progress.completed_week_ids() == set()

    await progression_service.complete_lesson(db_session, progress, curriculum.lesson(0, 0, 1).id, now=NOW)
    db_session.refresh(progress)
    assert progress.completed_week_ids() == {week_one.id}
    assert progress.completed_phase_ids() == set()
    week_entry = progress.completed_weeks[0]
    # Week totals come from lesson durations, not the reported time.
    assert week_entry.time_spent == 40
    assert week_entry.points_earned == 30

    await progression_service.complete_lesson(db_session, progress, curriculum.lesson(0, 1, 0).id, now=NOW)
    db_session.refresh(progress)
    assert progress.completed_week_ids() == {week_one.id, week_two.id}
    assert progress.completed_phase_ids() == {phase.id}
    phase_entry = progress.completed_phases[0]
    assert phase_entry.time_spent == 60
    assert phase_entry.points_earned == 45


@pytest.mark.asyncio
async def test_week_cascades_once_for_any_completion_order(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[3]])
    lessons = curriculum.all_lessons()
    progress = await _ledger(db_session, user_factory)

    for lesson in list(reversed(lessons)) + lessons:
        await progression_service.complete_lesson(db_session, progress, lesson.id, now=NOW)

    db_session.refresh(progress)
    assert len(progress.completed_lessons) == 3
    assert len(progress.completed_weeks) == 1
    assert len(progress.completed_phases) == 1
    assert progress.total_points == 30


@pytest.mark.asyncio
async def test_inactive_lessons_do_not_block_week_completion(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[2]])
    active, inactive = curriculum.lesson(0, 0, 0), curriculum.lesson(0, 0, 1)
    inactive.is_active = False
    db_session.commit()
    progress = await _ledger(db_session, user_factory)

    await progression_service.complete_lesson(db_session, progress, active.id, now=NOW)

    db_session.refresh(progress)
    assert progress.completed_week_ids() == {curriculum.weeks[0][0].id}
    assert progress.completed_phase_ids() == {curriculum.phases[0].id}


@pytest.mark.asyncio
async def test_cursor_rolls_over_to_next_week_and_phase(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[1, 1], [1]])
    progress = await _ledger(db_session, user_factory)

    result = await progression_service.complete_lesson(db_session, progress, curriculum.lesson(0, 0, 0).id, now=NOW)
    db_session.refresh(progress)
    assert result.next_lesson.id == curriculum.lesson(0, 1, 0).id
    assert progress.current_week_id == curriculum.weeks[0][1].id
    assert progress.current_phase_id == curriculum.phases[0].id

    result = await progression_service.complete_lesson(db_session, progress, curriculum.lesson(0, 1, 0).id, now=NOW)
    db_session.refresh(progress)
    assert result.next_lesson.id == curriculum.lesson(1, 0, 0).id
    assert progress.current_lesson_id == curriculum.lesson(1, 0, 0).id
    assert progress.current_week_id == curriculum.weeks[1][0].id
    assert progress.current_phase_id == curriculum.phases[1].id


@pytest.mark.asyncio
async def test_cursor_unchanged_at_curriculum_end(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[2]])
    first, last = curriculum.lesson(0, 0, 0), curriculum.lesson(0, 0, 1)
    progress = await _ledger(db_session, user_factory)

    await progression_service.complete_lesson(db_session, progress, first.id, now=NOW)
    result = await progression_service.complete_lesson(db_session, progress, last.id, now=NOW)

    assert result.next_lesson is None
    db_session.refresh(progress)
    assert progress.current_lesson_id == last.id


@pytest.mark.asyncio
async def test_cursor_skips_completed_and_inactive_lessons(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[4]])
    first, second, third, fourth = curriculum.all_lessons()
    third.is_active = False
    db_session.commit()
    progress = await _ledger(db_session, user_factory)

    await progression_service.complete_lesson(db_session, progress, second.id, now=NOW)
    result = await progression_service.complete_lesson(db_session, progress, first.id, now=NOW)

    assert result.next_lesson.id == fourth.id


@pytest.mark.asyncio
async def test_unknown_lesson_is_not_found(db_session: Session, user_factory, curriculum_factory):
    curriculum_factory([[1]])
    progress = await _ledger(db_session, user_factory)

    with pytest.raises(HTTPException) as exc_info:
        await progression_service.complete_lesson(db_session, progress, 9999, now=NOW)

    assert exc_info.value.status_code == 404
    db_session.refresh(progress)
    assert progress.total_points == 0


@pytest.mark.asyncio
async def test_stale_version_is_retried(db_session: Session, user_factory, curriculum_factory):
    curriculum = curriculum_factory([[2]])
    progress = await _ledger(db_session, user_factory)

    # Another writer bumps the version behind this session's back.
    db_session.connection().execute(
        text("UPDATE user_progress SET version = version + 1 WHERE id = :id"), {"id": progress.id}
    )

    result = await progression_service.complete_lesson(db_session, progress, curriculum.lesson(0, 0, 0).id, now=NOW)

    assert result.already_completed is False
    reloaded = await progress_service.ensure_progress(db_session, progress.user)
    assert reloaded.total_points == 10
    assert len(reloaded.completed_lessons) == 1


@pytest.mark.asyncio
async def test_persistent_conflict_returns_409(db_session: Session, user_factory, curriculum_factory, monkeypatch):
    curriculum = curriculum_factory([[1]])
    progress = await _ledger(db_session, user_factory)
    calls = {"n": 0}

    def always_stale():
        calls["n"] += 1
        raise StaleDataError("simulated concurrent update")

    monkeypatch.setattr(db_session, "commit", always_stale)

    with pytest.raises(HTTPException) as exc_info:
        await progression_service.complete_lesson(db_session, progress, curriculum.lesson(0, 0, 0).id, now=NOW)

    assert exc_info.value.status_code == 409
    assert calls["n"] == settings.PROGRESS_WRITE_MAX_ATTEMPTS
