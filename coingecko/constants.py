# coingecko/constants.py
"""Values callers may pass through as parameters, plus API-wide constants."""

HOST = "api.coingecko.com"
PORT = 443
API_VERSION = 3
PATH_PREFIX = f"/api/v{API_VERSION}"

# Documented by CoinGecko, not enforced here. Throttle on the caller side.
REQUESTS_PER_SECOND = 10

ACCEPTED_METHODS = ("GET",)

DEFAULT_VS_CURRENCY = "usd"
DEFAULT_DAYS = 1

ORDER = {
    "GECKO_ASC": "gecko_asc",
    "GECKO_DESC": "gecko_desc",
    "MARKET_CAP_ASC": "market_cap_asc",
    "MARKET_CAP_DESC": "market_cap_desc",
    "VOLUME_ASC": "volume_asc",
    "VOLUME_DESC": "volume_desc",
    "COIN_NAME_ASC": "coin_name_asc",
    "COIN_NAME_DESC": "coin_name_desc",
    "PRICE_ASC": "price_asc",
    "PRICE_DESC": "price_desc",
    "HOUR_24_ASC": "h24_change_asc",
    "HOUR_24_DESC": "h24_change_desc",
    "TRUST_SCORE_DESC": "trust_score_desc",
    "NAME_ASC": "name_asc",
    "NAME_DESC": "name_desc",
    "OPEN_INTEREST_BTC_ASC": "open_interest_btc_asc",
    "OPEN_INTEREST_BTC_DESC": "open_interest_btc_desc",
    "TRADE_VOLUME_24H_BTC_ASC": "trade_volume_24h_btc_asc",
    "TRADE_VOLUME_24H_BTC_DESC": "trade_volume_24h_btc_desc",
}

STATUS_UPDATE_CATEGORY = {
    "GENERAL": "general",
    "MILESTONE": "milestone",
    "PARTNERSHIP": "partnership",
    "EXCHANGE_LISTING": "exchange_listing",
    "SOFTWARE_RELEASE": "software_release",
    "FUND_MOVEMENT": "fund_movement",
    "NEW_LISTINGS": "new_listings",
    "EVENT": "event",
}

STATUS_UPDATE_PROJECT_TYPE = {
    "COIN": "coin",
    "MARKET": "market",
}

EVENT_TYPE = {
    "EVENT": "Event",
    "CONFERENCE": "Conference",
    "MEETUP": "Meetup",
}

# Marker of the gateway's error page, returned instead of JSON on bad requests.
HTML_DOCTYPE = "<!doctype html>"
