import pytest

from devcamper.exceptions import ValidationFailedError
from devcamper.querying.builder import DEFAULT_SORT, ListQuery
from devcamper.querying.filters import Condition, Operator, parse_filters, split_fields


def test_bare_key_is_equality() -> None:
    assert parse_filters([("housing", "true")]) == [Condition("housing", Operator.EQ, ("true",))]


@pytest.mark.parametrize("key", ["averageCost[lte]", "averageCost[$lte]", "averageCost[LTE]"])
def test_operator_spellings(key: str) -> None:
    [condition] = parse_filters([(key, "10000")])
    assert condition == Condition("averageCost", Operator.LTE, ("10000",))


def test_in_splits_on_commas() -> None:
    [condition] = parse_filters([("careers[in]", "UI/UX, Business,")])
    assert condition.operator is Operator.IN
    assert condition.values == ("UI/UX", "Business")


def test_repeated_equality_becomes_membership() -> None:
    [condition] = parse_filters([("location.state", "MA"), ("location.state", "NY")])
    assert condition == Condition("location.state", Operator.IN, ("MA", "NY"))


def test_repeated_comparison_keeps_last_value() -> None:
    [condition] = parse_filters([("averageCost[gt]", "5"), ("averageCost[gt]", "7")])
    assert condition.values == ("7",)
    assert condition.value == "7"


def test_different_operators_on_one_field_combine() -> None:
    conditions = parse_filters([("averageCost[gte]", "8000"), ("averageCost[lt]", "12000")])
    assert [c.operator for c in conditions] == [Operator.GTE, Operator.LT]


def test_reserved_keys_are_not_filters() -> None:
    params = [("select", "name"), ("sort", "-name"), ("limit", "2"), ("page", "1")]
    assert parse_filters(params) == []


def test_unsupported_operator() -> None:
    with pytest.raises(ValidationFailedError, match="Unsupported filter operator: regex"):
        parse_filters([("name[regex]", "^Dev")])


def test_malformed_key() -> None:
    with pytest.raises(ValidationFailedError, match=r"Invalid filter parameter: name\[gt"):
        parse_filters([("name[gt", "x")])


def test_split_fields() -> None:
    assert split_fields("name, description,,") == ("name", "description")
    assert split_fields(" , ") is None
    assert split_fields(None) is None


def test_list_query_from_params() -> None:
    query = ListQuery.from_params(
        [("select", "name,careers"), ("averageCost[lte]", "10000"), ("limit", "5"), ("page", "2")],
        default_limit=15,
    )
    assert query.select == ("name", "careers")
    assert query.sort == DEFAULT_SORT
    assert query.page.limit == 5
    assert query.page.offset == 5
    assert query.conditions == (Condition("averageCost", Operator.LTE, ("10000",)),)


def test_list_query_defaults() -> None:
    query = ListQuery.from_params([], default_limit=25)
    assert query.select is None
    assert query.page.page == 1
    assert query.page.limit == 25
