import pytest

from reviewhub.api.binding import MAX_PAGE, bind_list_filter, parse_positive_int
from reviewhub.exceptions import MalformedIdFilterError


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 7), ("", 7), ("3", 3), ("0", 7), ("-2", 7), ("abc", 7), ("2.5", 7)],
)
def test_parse_positive_int(raw, expected):
    assert parse_positive_int(raw, 7) == expected


def test_bind_list_filter_defaults():
    list_filter = bind_list_filter(None, None)
    assert list_filter.page == 1
    assert list_filter.limit == 10
    assert list_filter.offset == 0
    assert [(o.column, o.order) for o in list_filter.order_by] == [("created_at", "desc")]


def test_bind_list_filter_caps_limit():
    assert bind_list_filter("1", "5000").limit == 100


def test_bind_list_filter_offset():
    assert bind_list_filter("3", "20").offset == 40


def test_bind_list_filter_keeps_empty_id_as_noop():
    list_filter = bind_list_filter("1", "10", id_filters={"business_id": ""})
    assert [(f.column, f.value) for f in list_filter.filters] == [("business_id", "")]


def test_bind_list_filter_rejects_malformed_id():
    with pytest.raises(MalformedIdFilterError) as excinfo:
        bind_list_filter("1", "10", id_filters={"business_id": "not-a-uuid"})
    assert excinfo.value.status_code == 404
    assert excinfo.value.to_dict() == {"Error:": "Wrong format type please write UUID"}


def test_parse_positive_int_clamps_to_maximum():
    assert parse_positive_int("99999999999999999999", 1, 1000) == 1000


def test_bind_list_filter_caps_page():
    list_filter = bind_list_filter("99999999999999999999", "100")
    assert list_filter.page == MAX_PAGE
    assert list_filter.offset < 2**63
