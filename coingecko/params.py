# coingecko/params.py
"""Per-endpoint parameter records and the checks applied before a request is built.

Every record field is optional; a field left at ``None`` is not sent.
Endpoint methods also accept a plain mapping, which passes through in the
caller's key order (a ``None`` value there is sent as ``key=``).
"""
from collections.abc import Iterable
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Sequence, Union
from urllib.parse import quote

from .constants import DEFAULT_DAYS, DEFAULT_VS_CURRENCY
from .errors import InvalidParameterError, MissingParameterError

IdList = Union[str, Sequence[str]]


class QueryParams:
    """Mixin turning a dataclass record into an ordered query mapping."""

    def to_query(self) -> Dict[str, Any]:
        query = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                query[f.name] = value
        return query


@dataclass
class PageParams(QueryParams):
    page: Optional[int] = None


@dataclass
class StatusUpdateParams(QueryParams):
    per_page: Optional[int] = None
    page: Optional[int] = None


@dataclass
class StatusUpdatesAllParams(QueryParams):
    category: Optional[str] = None
    project_type: Optional[str] = None
    per_page: Optional[int] = None
    page: Optional[int] = None


@dataclass
class CoinsAllParams(QueryParams):
    order: Optional[str] = None
    per_page: Optional[int] = None
    page: Optional[int] = None
    localization: Optional[bool] = None
    sparkline: Optional[bool] = None


@dataclass
class MarketsParams(QueryParams):
    vs_currency: Optional[str] = DEFAULT_VS_CURRENCY
    ids: Optional[IdList] = None
    category: Optional[str] = None
    order: Optional[str] = None
    per_page: Optional[int] = None
    page: Optional[int] = None
    sparkline: Optional[bool] = None
    price_change_percentage: Optional[str] = None


@dataclass
class CoinParams(QueryParams):
    localization: Optional[bool] = None
    tickers: Optional[bool] = None
    market_data: Optional[bool] = None
    community_data: Optional[bool] = None
    developer_data: Optional[bool] = None
    sparkline: Optional[bool] = None


@dataclass
class HistoryParams(QueryParams):
    date: Optional[str] = None  # dd-mm-yyyy
    localization: Optional[bool] = None


@dataclass
class MarketChartParams(QueryParams):
    vs_currency: Optional[str] = DEFAULT_VS_CURRENCY
    days: Optional[Union[int, str]] = DEFAULT_DAYS
    interval: Optional[str] = None


@dataclass
class TrendingPoolsParams(QueryParams):
    include: Optional[IdList] = None
    page: Optional[int] = None


@dataclass
class EventsParams(QueryParams):
    country_code: Optional[str] = None
    type: Optional[str] = None
    page: Optional[int] = None
    upcoming_events_only: Optional[bool] = None
    from_date: Optional[str] = None  # yyyy-mm-dd
    to_date: Optional[str] = None  # yyyy-mm-dd


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value == ""


def require_id(value: Any, name: str) -> str:
    """Checks a path-segment identifier and returns it unchanged."""
    if is_blank(value):
        raise InvalidParameterError(
            f"{name} must be of type str and greater than 0 characters.", parameter=name
        )
    return value


def join_ids(value: Any) -> Any:
    """Joins an iterable of identifiers into one comma-separated string."""
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping)):
        return ",".join(str(v) for v in value)
    return value


def as_query(params: Union[None, QueryParams, Mapping[str, Any]]) -> Dict[str, Any]:
    """Copies ``params`` into a fresh dict. The caller's object is never mutated."""
    if params is None:
        return {}
    if isinstance(params, QueryParams):
        return params.to_query()
    if isinstance(params, Mapping):
        return dict(params)
    raise InvalidParameterError(
        f"params must be a mapping or a parameter record, got {type(params).__name__}",
        parameter="params",
    )


def with_vs_currency(query: Dict[str, Any]) -> Dict[str, Any]:
    if is_blank(query.get("vs_currency")):
        query["vs_currency"] = DEFAULT_VS_CURRENCY
    return query


def with_days(query: Dict[str, Any]) -> Dict[str, Any]:
    if query.get("days") is None:
        query["days"] = DEFAULT_DAYS
    return query


def markets_query(params) -> Dict[str, Any]:
    query = with_vs_currency(as_query(params))
    if "ids" in query:
        query["ids"] = join_ids(query["ids"])
    return query


def history_query(params) -> Dict[str, Any]:
    query = as_query(params)
    if is_blank(query.get("date")):
        raise MissingParameterError(
            "params must include `date` and be a string in format: `dd-mm-yyyy`", parameter="date"
        )
    return query


def market_chart_query(params) -> Dict[str, Any]:
    return with_days(with_vs_currency(as_query(params)))


def trending_pools_query(params) -> Dict[str, Any]:
    query = as_query(params)
    if "include" in query:
        query["include"] = join_ids(query["include"])
    return query


def path_segment(value: Any, name: str) -> str:
    """Checks an identifier and percent-encodes it for use as one path segment."""
    return quote(require_id(value, name), safe="")


def addresses_segment(addresses: Any) -> str:
    """Path segment for token addresses: a string or a sequence joined by commas."""
    return quote(require_id(join_ids(addresses), "addresses"), safe=",")
