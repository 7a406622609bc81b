import uuid

import pytest

from reviewhub.exceptions import ConflictError, InvalidFilterError, NotFoundError
from reviewhub.schemas import Filter, GetListFilter, OrderBy
from tests.conftest import make_user


@pytest.fixture
def business_id(repos):
    owner = make_user(username="owner")
    return repos.businesses.create({"name": "Bakery", "owner_id": owner.id}).id


def test_create_assigns_distinct_ids(repos, business_id):
    ids = {repos.reviews.create({"business_id": business_id, "rating": 4}).id for _ in range(5)}
    assert len(ids) == 5
    assert all(uuid.UUID(i) for i in ids)


def test_get_list_counts_before_paging(repos, business_id):
    for rating in (1, 2, 3, 4, 5):
        repos.reviews.create({"business_id": business_id, "rating": rating})

    list_filter = GetListFilter(
        page=2,
        limit=2,
        filters=[Filter(column="business_id", value=business_id)],
        order_by=[OrderBy(column="rating", order="asc")],
    )
    items, count = repos.reviews.get_list(list_filter)
    assert count == 5
    assert [r.rating for r in items] == [3, 4]


def test_get_list_page_past_the_end(repos, business_id):
    repos.reviews.create({"business_id": business_id, "rating": 5})
    items, count = repos.reviews.get_list(GetListFilter(page=9, limit=10))
    assert items == []
    assert count == 1


def test_filter_operators(repos, business_id):
    for rating in (1, 3, 5):
        repos.reviews.create({"business_id": business_id, "rating": rating})

    items, count = repos.reviews.get_list(
        GetListFilter(filters=[Filter(column="rating", type="gte", value=3)])
    )
    assert count == 2
    assert {r.rating for r in items} == {3, 5}


def test_unknown_filter_column(repos):
    with pytest.raises(InvalidFilterError):
        repos.users.get_list(GetListFilter(filters=[Filter(column="password", value="x")]))


def test_unknown_filter_operator(repos):
    with pytest.raises(InvalidFilterError):
        repos.reviews.get_list(GetListFilter(filters=[Filter(column="rating", type="regex", value="1")]))


def test_missing_rows_raise_not_found(repos):
    missing = str(uuid.uuid4())
    with pytest.raises(NotFoundError):
        repos.reviews.get_single(missing)
    with pytest.raises(NotFoundError):
        repos.reviews.update(missing, {"rating": 2})
    with pytest.raises(NotFoundError):
        repos.reviews.delete(missing)


def test_update_keeps_id_and_created_at(repos, business_id):
    review = repos.reviews.create({"business_id": business_id, "rating": 2})
    created_at = review.created_at

    updated = repos.reviews.update(
        review.id, {"id": "other", "created_at": None, "rating": 5}
    )
    assert updated.id == review.id
    assert updated.created_at == created_at
    assert updated.rating == 5
    assert updated.updated_at >= created_at


def test_duplicate_username_is_conflict(repos):
    make_user(username="zed")
    with pytest.raises(ConflictError):
        repos.users.create({"username": "zed", "email": "zed2@example.com", "password": "x"})


def test_user_search_is_case_insensitive(repos):
    make_user(username="Mallory", email="mallory@corp.test")
    make_user(username="trent")

    users, count = repos.users.get_list(GetListFilter(), search="corp")
    assert count == 1
    assert users[0].username == "Mallory"


def test_get_list_page_far_past_the_end(repos, business_id):
    repos.reviews.create({"business_id": business_id, "rating": 5})
    items, count = repos.reviews.get_list(GetListFilter(page=10**12, limit=100))
    assert items == []
    assert count == 1
