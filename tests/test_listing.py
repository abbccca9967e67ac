"""Paginated listing with search, author filter and sorting."""

from pressbutton.models.vote import ButtonChoice
from pressbutton.schemas.question import QuestionsQuery, SortBy
from pressbutton.services import questions as questions_service


async def test_first_page_and_total_pages(sessions, make_user, make_question):
    author = await make_user()
    for i in range(25):
        await make_question(author, f"Positive outcome {i}", f"Negative outcome {i}")

    rows, pagination = await questions_service.list_questions(
        sessions, QuestionsQuery(page=1, limit=10)
    )

    assert len(rows) == 10
    assert pagination.total == 25
    assert pagination.total_pages == 3


async def test_page_past_the_end_is_empty(sessions, make_user, make_question):
    author = await make_user()
    for i in range(25):
        await make_question(author, f"Positive outcome {i}", f"Negative outcome {i}")

    rows, pagination = await questions_service.list_questions(
        sessions, QuestionsQuery(page=4, limit=10)
    )

    assert rows == []
    assert pagination.page == 4
    assert pagination.total == 25


async def test_empty_store(sessions):
    rows, pagination = await questions_service.list_questions(sessions, QuestionsQuery())
    assert rows == []
    assert pagination.total == 0
    assert pagination.total_pages == 0


async def test_search_is_case_insensitive_on_both_outcomes(sessions, make_user, make_question):
    author = await make_user()
    money = await make_question(author, "Money rains from the sky", "Your cat hates you")
    cat = await make_question(author, "Free pizza forever", "Every CAT ignores you")
    await make_question(author, "Nothing special", "Nothing at all")

    rows, pagination = await questions_service.list_questions(
        sessions, QuestionsQuery(search="money")
    )
    assert [r.question.id for r in rows] == [money.id]
    assert pagination.total == 1

    rows, _ = await questions_service.list_questions(sessions, QuestionsQuery(search="cat"))
    assert {r.question.id for r in rows} == {money.id, cat.id}


async def test_search_treats_wildcards_literally(sessions, make_user, make_question):
    author = await make_user()
    await make_question(author, "Win 100% of the time", "Lose everything")
    await make_question(author, "Win 100 dollars", "Lose a sock")

    rows, _ = await questions_service.list_questions(sessions, QuestionsQuery(search="100%"))

    assert len(rows) == 1


async def test_author_filter(sessions, make_user, make_question):
    alice = await make_user()
    bob = await make_user()
    await make_question(alice)
    mine = await make_question(bob)

    rows, pagination = await questions_service.list_questions(
        sessions, QuestionsQuery(author_id=bob.id)
    )

    assert [r.question.id for r in rows] == [mine.id]
    assert pagination.total == 1


async def test_sort_orders(sessions, make_user, make_question, add_vote, add_comment):
    author = await make_user()
    first = await make_question(author)
    second = await make_question(author)
    third = await make_question(author)
    for _ in range(2):
        await add_vote(second, await make_user(), ButtonChoice.PRESS)
    await add_vote(first, await make_user(), ButtonChoice.DONT_PRESS)
    await add_comment(first, author)

    newest, _ = await questions_service.list_questions(sessions, QuestionsQuery())
    oldest, _ = await questions_service.list_questions(
        sessions, QuestionsQuery(sort_by=SortBy.OLDEST)
    )
    most_voted, _ = await questions_service.list_questions(
        sessions, QuestionsQuery(sort_by=SortBy.MOST_VOTED)
    )

    assert [r.question.id for r in newest] == [third.id, second.id, first.id]
    assert [r.question.id for r in oldest] == [first.id, second.id, third.id]
    assert [r.question.id for r in most_voted] == [second.id, first.id, third.id]
    assert [(r.vote_count, r.comment_count) for r in most_voted] == [(2, 0), (1, 1), (0, 0)]
