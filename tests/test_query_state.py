import pytest

from listings.models.query import FilterCriteria, PageRequest, QueryState, SortOrder
from listings.services.query_state import (
    ApplyFilters,
    ChangePage,
    ChangePageSize,
    ChangeSort,
    ClearFilters,
    reduce,
)


def _state(page: int = 3, limit: int = 9, sort: SortOrder = SortOrder.PRICE_ASC) -> QueryState:
    return QueryState(
        filters=FilterCriteria(location="Pokhara", min_price="100"),
        sort=sort,
        page=PageRequest(page=page, limit=limit),
    )


def test_request_params_match_example():
    state = QueryState(
        filters=FilterCriteria(min_price="1000000", status="available"),
        sort=SortOrder.ROI_DESC,
        page=PageRequest(page=2, limit=9),
    )
    params = state.to_params()
    assert params == {
        "minPrice": "1000000",
        "status": "available",
        "sort": "roi_desc",
        "page": "2",
        "limit": "9",
    }
    assert "&".join(f"{k}={v}" for k, v in params.items()) == (
        "minPrice=1000000&status=available&sort=roi_desc&page=2&limit=9"
    )


def test_empty_and_blank_filters_are_omitted():
    state = QueryState(filters=FilterCriteria(location="   ", max_price="", min_roi=" 7.5 "))
    params = state.to_params()
    assert "location" not in params
    assert "maxPrice" not in params
    assert params["minRoi"] == "7.5"


def test_numeric_filters_are_coerced_at_build_time():
    filters = FilterCriteria(category_id="2.0", min_area="1200.00", max_distance_from_highway="abc")
    params = QueryState(filters=filters).to_params()
    assert params["categoryId"] == "2"
    assert params["minArea"] == "1200"
    assert "maxDistanceFromHighway" not in params


def test_long_integral_filters_are_sent_exactly():
    filters = FilterCriteria(min_price="12345678901234567891", max_price="1e3", min_roi="0.50")
    params = QueryState(filters=filters).to_params()
    assert params["minPrice"] == "12345678901234567891"
    assert params["maxPrice"] == "1000"
    assert params["minRoi"] == "0.5"


def test_non_finite_filters_are_dropped():
    params = QueryState(filters=FilterCriteria(min_price="nan", max_price="inf")).to_params()
    assert "minPrice" not in params
    assert "maxPrice" not in params


def test_filter_params_follow_declared_order():
    filters = FilterCriteria(status="sold", location="Chitwan", max_price="5", category_id="1")
    keys = list(QueryState(filters=filters).to_params())
    assert keys == ["location", "categoryId", "maxPrice", "status", "sort", "page", "limit"]


def test_active_count_for_empty_criteria_is_zero():
    assert FilterCriteria().active_count == 0
    assert FilterCriteria().is_empty()


def test_active_count_counts_non_empty_fields():
    criteria = FilterCriteria(location="Pokhara", min_roi="5", status="available", max_price="  ")
    assert criteria.active_count == 3


def test_with_value_rejects_unknown_field():
    with pytest.raises(KeyError):
        FilterCriteria().with_value("bedrooms", "3")


def test_apply_filters_resets_page():
    for page in (1, 2, 7):
        state = _state(page=page)
        new_filters = FilterCriteria(status="pending")
        result = reduce(state, ApplyFilters(new_filters))
        assert result.page.page == 1
        assert result.filters == new_filters
        assert result.page.limit == state.page.limit
        assert result.sort == state.sort


def test_clear_filters_restores_defaults_but_keeps_limit():
    result = reduce(_state(limit=18, sort=SortOrder.ROI_DESC), ClearFilters())
    assert result.filters == FilterCriteria()
    assert result.sort is SortOrder.NEWEST
    assert result.page == PageRequest(page=1, limit=18)


def test_change_sort_keeps_page():
    # Sorting deliberately does not return to the first page, unlike filters and page size.
    result = reduce(_state(page=4), ChangeSort(SortOrder.PRICE_DESC))
    assert result.sort is SortOrder.PRICE_DESC
    assert result.page.page == 4


def test_change_sort_accepts_wire_value():
    assert reduce(QueryState(), ChangeSort("roi_desc")).sort is SortOrder.ROI_DESC


def test_change_page_floors_at_one_and_is_not_bounded_above():
    assert reduce(_state(page=2), ChangePage(0)).page.page == 1
    assert reduce(_state(page=2), ChangePage(-5)).page.page == 1
    assert reduce(_state(page=2), ChangePage(99)).page.page == 99


def test_change_page_size_resets_page():
    for page in (1, 5):
        result = reduce(_state(page=page), ChangePageSize(12))
        assert result.page == PageRequest(page=1, limit=12)


def test_change_page_size_rejects_sizes_outside_allowed_set():
    with pytest.raises(ValueError):
        reduce(QueryState(), ChangePageSize(10))


def test_page_request_validation():
    with pytest.raises(ValueError):
        PageRequest(page=0)
    with pytest.raises(ValueError):
        PageRequest(limit=100)


def test_reduce_returns_new_value_without_mutating_input():
    state = _state(page=3)
    reduce(state, ChangePage(5))
    assert state.page.page == 3


def test_equal_states_compare_equal():
    assert QueryState() == QueryState()
    assert reduce(QueryState(), ChangePage(1)) == QueryState()


def test_unknown_event_is_rejected():
    with pytest.raises(TypeError):
        reduce(QueryState(), object())
