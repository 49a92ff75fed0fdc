# coingecko/client.py
"""Client for the CoinGecko public API (v3).

Every endpoint method checks its arguments first and raises
``InvalidParameterError`` / ``MissingParameterError`` before touching the
network. A completed round-trip always returns an ``Envelope``, including
4xx/5xx answers; only transport and decoding failures raise.

    client = CoinGecko()
    result = client.coins_markets({"ids": ["bitcoin", "ethereum"]})
    if result.success:
        prices = {c["id"]: c["current_price"] for c in result.data}
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Union

import requests

from . import constants
from .config import get_host, get_timeout
from .envelope import Envelope
from .params import (
    CoinParams,
    CoinsAllParams,
    EventsParams,
    HistoryParams,
    MarketChartParams,
    MarketsParams,
    PageParams,
    StatusUpdateParams,
    StatusUpdatesAllParams,
    TrendingPoolsParams,
    addresses_segment,
    as_query,
    history_query,
    market_chart_query,
    markets_query,
    path_segment,
    trending_pools_query,
)
from .request import build_request_options, perform_request

logger = logging.getLogger(__name__)

Params = Optional[Mapping[str, Any]]


class CoinGecko:
    API_VERSION = constants.API_VERSION
    REQUESTS_PER_SECOND = constants.REQUESTS_PER_SECOND
    ACCEPTED_METHODS = constants.ACCEPTED_METHODS
    ORDER = constants.ORDER
    STATUS_UPDATE_CATEGORY = constants.STATUS_UPDATE_CATEGORY
    STATUS_UPDATE_PROJECT_TYPE = constants.STATUS_UPDATE_PROJECT_TYPE
    EVENT_TYPE = constants.EVENT_TYPE

    def __init__(self, host: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.host = host or get_host()
        self.timeout = timeout or get_timeout()
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "CoinGecko":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Envelope:
        options = build_request_options("GET", path, query, host=self.host)
        return perform_request(options, session=self.session, timeout=self.timeout)

    # --- General ---

    def ping(self) -> Envelope:
        """Checks API server status."""
        return self._get("/ping")

    def global_data(self) -> Envelope:
        """Gets cryptocurrency global data."""
        return self._get("/global")

    # --- Coins ---

    def coins_all(self, params: Union[Params, CoinsAllParams] = None) -> Envelope:
        """Lists all coins with data (name, price, market, developer, community)."""
        return self._get("/coins", as_query(params))

    def coins_list(self) -> Envelope:
        """Lists every coin id, name and symbol."""
        return self._get("/coins/list")

    def coins_markets(self, params: Union[Params, MarketsParams] = None) -> Envelope:
        """Gets market data (price, market cap, volume) for all or selected coins.

        ``vs_currency`` defaults to ``usd``. ``ids`` may be a list, sent as one
        comma-separated value.
        """
        return self._get("/coins/markets", markets_query(params))

    def coins_fetch(self, coin_id: str, params: Union[Params, CoinParams] = None) -> Envelope:
        """Gets current data for a coin, including exchange tickers."""
        coin_id = path_segment(coin_id, "coin_id")
        return self._get(f"/coins/{coin_id}", as_query(params))

    def coins_fetch_tickers(self, coin_id: str, params: Union[Params, PageParams] = None) -> Envelope:
        coin_id = path_segment(coin_id, "coin_id")
        return self._get(f"/coins/{coin_id}/tickers", as_query(params))

    def coins_fetch_history(self, coin_id: str, params: Union[Params, HistoryParams] = None) -> Envelope:
        """Gets a coin snapshot at ``params["date"]`` (dd-mm-yyyy), which is required."""
        coin_id = path_segment(coin_id, "coin_id")
        return self._get(f"/coins/{coin_id}/history", history_query(params))

    def coins_fetch_market_chart(self, coin_id: str,
                                 params: Union[Params, MarketChartParams] = None) -> Envelope:
        """Gets historical price, market cap and volume. Defaults: ``usd``, 1 day."""
        coin_id = path_segment(coin_id, "coin_id")
        return self._get(f"/coins/{coin_id}/market_chart", market_chart_query(params))

    def coins_fetch_status_updates(self, coin_id: str,
                                   params: Union[Params, StatusUpdateParams] = None) -> Envelope:
        coin_id = path_segment(coin_id, "coin_id")
        return self._get(f"/coins/{coin_id}/status_updates", as_query(params))

    # --- Exchanges ---

    def exchanges_all(self) -> Envelope:
        return self._get("/exchanges")

    def exchanges_fetch(self, exchange_id: str) -> Envelope:
        """Gets exchange volume in BTC and its top 100 tickers."""
        exchange_id = path_segment(exchange_id, "exchange_id")
        return self._get(f"/exchanges/{exchange_id}")

    def exchanges_fetch_tickers(self, exchange_id: str, params: Union[Params, PageParams] = None) -> Envelope:
        exchange_id = path_segment(exchange_id, "exchange_id")
        return self._get(f"/exchanges/{exchange_id}/tickers", as_query(params))

    def exchanges_fetch_status_updates(self, exchange_id: str,
                                       params: Union[Params, StatusUpdateParams] = None) -> Envelope:
        exchange_id = path_segment(exchange_id, "exchange_id")
        return self._get(f"/exchanges/{exchange_id}/status_updates", as_query(params))

    # --- Status updates ---

    def status_updates_all(self, params: Union[Params, StatusUpdatesAllParams] = None) -> Envelope:
        """Lists status updates. Filter with ``STATUS_UPDATE_CATEGORY`` / ``STATUS_UPDATE_PROJECT_TYPE`` values."""
        return self._get("/status_updates", as_query(params))

    # --- On-chain DEX ---

    def onchain_networks(self, params: Union[Params, PageParams] = None) -> Envelope:
        return self._get("/onchain/networks", as_query(params))

    def onchain_dexes(self, network: str, params: Union[Params, PageParams] = None) -> Envelope:
        """Lists the dexes supported on a network."""
        network = path_segment(network, "network")
        return self._get(f"/onchain/networks/{network}/dexes", as_query(params))

    def onchain_token_price(self, network: str, addresses: Union[str, Sequence[str]]) -> Envelope:
        """Gets current USD prices of tokens on a network (max 30 addresses)."""
        network = path_segment(network, "network")
        segment = addresses_segment(addresses)
        return self._get(f"/onchain/simple/networks/{network}/token_price/{segment}")

    def onchain_trending_pools(self, params: Union[Params, TrendingPoolsParams] = None) -> Envelope:
        """Lists trending pools. ``include`` may be a list of base_token, quote_token, dex, network."""
        return self._get("/onchain/networks/trending_pools", trending_pools_query(params))

    # --- Events ---

    def events_all(self, params: Union[Params, EventsParams] = None) -> Envelope:
        """Gets events, paginated by 100."""
        return self._get("/events", as_query(params))

    def events_fetch_countries(self) -> Envelope:
        return self._get("/events/countries")

    def events_fetch_types(self) -> Envelope:
        return self._get("/events/types")

    # --- Exchange rates ---

    def exchange_rates_all(self) -> Envelope:
        """Gets BTC-to-currency exchange rates."""
        return self._get("/exchange_rates")
